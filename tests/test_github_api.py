"""Tests for src.sweeper.github_api checking each endpoint wrapper's request shape.

Run with coverage:
    pytest tests/test_github_api.py --maxfail=1 -v --cov=src.sweeper.github_api --cov-report=term-missing
"""

from unittest.mock import patch

from src.sweeper import github_api
from src.sweeper.models import PullRequest, Repository


@patch("src.sweeper.github_api.paged_get")
def test_list_user_repos_filters_to_owned(mock_paged):
    mock_paged.return_value = [
        {"name": "a", "owner": {"login": "me"}},
        {"name": "b", "owner": {"login": "me"}, "has_wiki": True},
    ]
    repos = github_api.list_user_repos()
    mock_paged.assert_called_once_with("/user/repos", {"affiliation": "owner"})
    assert [repo.full_name for repo in repos] == ["me/a", "me/b"]
    assert repos[1].has_wiki is True


@patch("src.sweeper.github_api.api_request")
def test_get_repo(mock_request):
    mock_request.return_value = {"name": "r", "owner": {"login": "o"}, "has_issues": True}
    repo = github_api.get_repo("o", "r")
    mock_request.assert_called_once_with("GET", "/repos/o/r")
    assert repo == Repository("o", "r", has_issues=True)


@patch("src.sweeper.github_api.api_request", return_value={"name": "r"})
def test_update_repo_sends_settings(mock_request):
    github_api.update_repo("o", "r", has_issues=False, has_wiki=False)
    mock_request.assert_called_once_with(
        "PATCH", "/repos/o/r", json={"has_issues": False, "has_wiki": False}
    )


@patch("src.sweeper.github_api.paged_get")
def test_list_open_pulls(mock_paged):
    mock_paged.return_value = [{"number": 3, "base": {"ref": "main"}, "head": {"sha": "s"}}]
    pulls = github_api.list_open_pulls("o", "r")
    mock_paged.assert_called_once_with("/repos/o/r/pulls", {"state": "open"})
    assert pulls == [PullRequest(3, "main", "s")]


@patch("src.sweeper.github_api.api_request", return_value={"merged": True})
def test_merge_pull_defaults_to_squash(mock_request):
    assert github_api.merge_pull("o", "r", 9) == {"merged": True}
    mock_request.assert_called_once_with(
        "PUT", "/repos/o/r/pulls/9/merge", json={"merge_method": "squash"}
    )


@patch("src.sweeper.github_api.api_request", return_value=None)
def test_merge_branch_posts_base_and_head(mock_request):
    assert github_api.merge_branch("o", "r", "main", "abc", "Force-merge PR #9") is None
    mock_request.assert_called_once_with(
        "POST",
        "/repos/o/r/merges",
        json={"base": "main", "head": "abc", "commit_message": "Force-merge PR #9"},
    )


@patch("src.sweeper.github_api.api_request", return_value={"state": "closed"})
def test_close_pull(mock_request):
    github_api.close_pull("o", "r", 9)
    mock_request.assert_called_once_with("PATCH", "/repos/o/r/pulls/9", json={"state": "closed"})
