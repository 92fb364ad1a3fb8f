"""tests for the command layer. the GitHub client is a fake, git is patched."""

from unittest.mock import patch

import pytest
import requests

from neo_reviewer.commands import auth, comment, comments, diff, fetch, reply, resolve, submit
from neo_reviewer.config import Config
from neo_reviewer.diff import ReviewFile
from neo_reviewer.git import GitError
from neo_reviewer.github.types import GitHubError, InvalidPrUrl
from neo_reviewer.review import DiffResponse


URL = "https://github.com/octocat/hello-world/pull/42"


class TestResolve:

    def test_given_objects_pass_through(self, fake_client):
        config = Config()
        assert resolve(config, fake_client) == (config, fake_client)

    @patch("neo_reviewer.commands.GitHubClient")
    def test_builds_client_from_config(self, mock_client):
        config, client = resolve()
        mock_client.from_config.assert_called_once_with(config)
        assert client is mock_client.from_config.return_value


class TestDiff:

    @patch("neo_reviewer.commands.diff.get_local_review")
    def test_defaults_from_config(self, mock_review):
        mock_review.return_value = DiffResponse(files=[ReviewFile(path="a.py")], git_root="/r")
        config = Config(values={"diff_base": "main", "git_timeout": 5})
        result = diff.run(config=config)
        assert result["git_root"] == "/r"
        assert result["files"][0]["path"] == "a.py"
        assert mock_review.call_args.args == ("main",)
        assert mock_review.call_args.kwargs["timeout"] == 5

    @patch("neo_reviewer.commands.diff.get_local_review")
    def test_explicit_base_wins(self, mock_review):
        mock_review.return_value = DiffResponse()
        diff.get_local_diff("develop", config=Config())
        assert mock_review.call_args.args == ("develop",)


class TestFetch:

    @patch("neo_reviewer.commands.fetch.get_pr_review_files")
    @patch("neo_reviewer.git.ensure_commit")
    def test_local(self, mock_ensure, mock_files, fake_client):
        mock_files.return_value = [ReviewFile(path="a.py", content="x")]
        result = fetch.run(URL, config=Config(), client=fake_client)
        assert set(result) == {"pr", "files", "comments", "viewer"}
        assert result["pr"]["head_sha"] == "head123"
        assert result["viewer"] == "reviewer"
        assert result["files"][0]["content"] == "x"
        assert result["comments"][0]["body"] == "nice"
        assert [c.args[0] for c in mock_ensure.call_args_list] == ["base456", "head123"]
        assert mock_files.call_args.args == ("base456", "head123")
        fake_client.get_pr_files.assert_not_called()

    @patch("neo_reviewer.git.ensure_commit")
    def test_missing_head_commit(self, mock_ensure, fake_client):
        mock_ensure.side_effect = [None, GitError("Failed to find commit head123: fatal")]
        with pytest.raises(GitError, match="gh pr checkout 42"):
            fetch.fetch_review(URL, config=Config(), client=fake_client)

    @patch("neo_reviewer.git.ensure_commit")
    def test_missing_base_commit(self, mock_ensure, fake_client):
        mock_ensure.side_effect = GitError("Failed to find commit base456: fatal")
        with pytest.raises(GitError, match="git fetch origin main"):
            fetch.fetch_review(URL, config=Config(), client=fake_client)

    def test_remote(self, fake_client):
        fake_client.get_pr_files.return_value = [ReviewFile(path="b.py")]
        result = fetch.run(URL, remote=True, config=Config(), client=fake_client)
        assert result["files"][0]["path"] == "b.py"
        assert fake_client.get_pr_files.call_args.args[1] == "head123"

    def test_bad_url(self, fake_client):
        with pytest.raises(InvalidPrUrl):
            fetch.run("https://example.com/nope", client=fake_client)
        fake_client.get_pr.assert_not_called()


class TestComment:

    def test_success(self, fake_client):
        result = comment.run(URL, "a.py", 2, "RIGHT", "nit", config=Config(), client=fake_client)
        assert result == {"success": True, "comment_id": 7,
                          "html_url": "https://github.com/c/7", "error": None}
        args = fake_client.add_review_comment.call_args
        assert args.args[1:] == ("head123", "a.py", 2, "RIGHT", "nit")
        assert args.kwargs == {"start_line": None, "start_side": None}

    def test_multi_line(self, fake_client):
        comment.run(URL, "a.py", 5, "RIGHT", "x", start_line=3, start_side="RIGHT",
                    config=Config(), client=fake_client)
        assert fake_client.add_review_comment.call_args.kwargs == {"start_line": 3, "start_side": "RIGHT"}

    def test_api_failure_lands_in_envelope(self, fake_client):
        fake_client.add_review_comment.side_effect = GitHubError(422, "Failed to create comment: line out of range")
        result = comment.run(URL, "a.py", 999, "RIGHT", "nit", config=Config(), client=fake_client)
        assert result["success"] is False
        assert "line out of range" in result["error"]
        assert result["comment_id"] is None

    def test_network_failure_lands_in_envelope(self, fake_client):
        fake_client.get_pr.side_effect = requests.ConnectionError("offline")
        result = comment.run(URL, "a.py", 1, "RIGHT", "x", config=Config(), client=fake_client)
        assert result["success"] is False

    def test_edit(self, fake_client):
        result = comment.run_edit(URL, 7, "reworded", config=Config(), client=fake_client)
        assert result["success"] is True
        assert result["comment_id"] == 7

    def test_delete(self, fake_client):
        result = comment.run_delete(URL, 7, config=Config(), client=fake_client)
        assert result == {"success": True, "comment_id": 7, "html_url": None, "error": None}

    def test_delete_failure(self, fake_client):
        fake_client.delete_review_comment.side_effect = GitHubError(403, "Failed to delete comment: forbidden")
        result = comment.run_delete(URL, 7, config=Config(), client=fake_client)
        assert result["success"] is False


class TestOthers:

    def test_comments(self, fake_client):
        result = comments.run(URL, config=Config(), client=fake_client)
        assert [c["id"] for c in result["comments"]] == [1]

    def test_reply(self, fake_client):
        result = reply.run(URL, 7, "done", config=Config(), client=fake_client)
        assert result["success"] is True
        assert result["comment_id"] == 8

    def test_reply_failure(self, fake_client):
        fake_client.reply_to_comment.side_effect = GitHubError(404, "Failed to reply to comment: gone")
        assert reply.run(URL, 7, "done", config=Config(), client=fake_client)["success"] is False

    def test_submit(self, fake_client):
        result = submit.run(URL, "request_changes", "please fix", config=Config(), client=fake_client)
        assert result == {"success": True, "event": "REQUEST_CHANGES"}
        fake_client.submit_review.assert_called_once()
        assert fake_client.submit_review.call_args.args[1:] == ("REQUEST_CHANGES", "please fix")

    def test_submit_failure_propagates(self, fake_client):
        fake_client.submit_review.side_effect = GitHubError(422, "Failed to submit review: nope")
        with pytest.raises(GitHubError):
            submit.run(URL, "APPROVE", config=Config(), client=fake_client)

    @patch("neo_reviewer.commands.auth.check_auth")
    def test_auth(self, mock_check):
        assert auth.run(config=Config()) is mock_check.return_value
