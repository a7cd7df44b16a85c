"""Tests for project detection from git remotes."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest


class TestParseProjectName:
    """Tests for remote URL parsing."""

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("ssh://gerrit.example.com/my-project", "my-project"),
            ("ssh://gerrit.example.com:29418/canvas-lms", "canvas-lms"),
            ("ssh://user@gerrit.example.com:29418/platform/build", "platform/build"),
            ("https://gerrit.example.com/a/my-project", "my-project"),
            ("https://gerrit.example.com/my-project", "my-project"),
            ("http://gerrit.example.com/my-project", "my-project"),
            ("git@gerrit.example.com:my-project", "my-project"),
            ("gerrit.example.com:my-project", "my-project"),
        ],
    )
    def test_supported_urls(self, url, expected):
        """Test each supported remote URL syntax."""
        from gerrit_changes.project import parse_project_name

        assert parse_project_name(url) == expected
        assert parse_project_name(url + ".git") == expected

    def test_strips_trailing_newline(self):
        """Test that git's trailing newline is ignored."""
        from gerrit_changes.project import parse_project_name

        assert parse_project_name("ssh://gerrit.example.com/my-project\n") == "my-project"

    @pytest.mark.parametrize("url", ["", "not-a-url", "ssh://gerrit.example.com/", "/local/path"])
    def test_unparseable_urls(self, url):
        """Test that unrecognized URLs raise UrlParseError carrying the URL."""
        from gerrit_changes.project import DetectionError, UrlParseError, parse_project_name

        with pytest.raises(UrlParseError) as exc_info:
            parse_project_name(url)

        assert exc_info.value.url == url
        assert "Could not parse project name" in str(exc_info.value)
        assert isinstance(exc_info.value, DetectionError)


class TestDetectProject:
    """Tests for detect_project error translation."""

    def test_detects_from_collaborator(self):
        """Test detection using the injected URL reader."""
        from gerrit_changes.project import detect_project

        assert detect_project(lambda: "ssh://gerrit.example.com:29418/canvas-lms\n") == "canvas-lms"

    def test_not_a_git_repository(self):
        """Test that a 'not a git repository' failure is translated."""
        from gerrit_changes.project import NotARepositoryError, detect_project

        def get_url():
            raise subprocess.CalledProcessError(
                128,
                ["git", "remote", "get-url", "origin"],
                stderr="fatal: not a git repository (or any of the parent directories): .git\n",
            )

        with pytest.raises(NotARepositoryError, match="Not in a git repository"):
            detect_project(get_url)

    def test_no_such_remote(self):
        """Test that a missing origin remote is translated."""
        from gerrit_changes.project import NoOriginRemoteError, detect_project

        def get_url():
            raise RuntimeError("error: No such remote 'origin'")

        with pytest.raises(NoOriginRemoteError, match='No git remote "origin" configured'):
            detect_project(get_url)

    def test_other_failures_are_wrapped(self):
        """Test that unrelated failures become a generic DetectionError."""
        from gerrit_changes.project import (
            DetectionError,
            NoOriginRemoteError,
            NotARepositoryError,
            detect_project,
        )

        def get_url():
            raise FileNotFoundError("git: command not found")

        with pytest.raises(DetectionError) as exc_info:
            detect_project(get_url)

        assert not isinstance(exc_info.value, (NotARepositoryError, NoOriginRemoteError))
        assert "git: command not found" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_unparseable_url_propagates(self):
        """Test that parse failures are not wrapped."""
        from gerrit_changes.project import UrlParseError, detect_project

        with pytest.raises(UrlParseError):
            detect_project(lambda: "nonsense\n")


class TestGetOriginUrl:
    """Tests for reading the origin remote."""

    def test_runs_git_remote_get_url(self):
        """Test that git is asked for the origin URL."""
        from gerrit_changes.project import get_origin_url

        with patch("gerrit_changes.project.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(stdout="ssh://gerrit.example.com/p\n")

            assert get_origin_url() == "ssh://gerrit.example.com/p\n"

            args = mock_run.call_args
            assert args.args[0] == ["git", "remote", "get-url", "origin"]
            assert args.kwargs["check"] is True
