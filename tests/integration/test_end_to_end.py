"""
End-to-end tests for the coverage check.

Runs main() against a temporary workspace laid out like a GitHub Actions
runner: event payload file, CODEOWNERS file, GITHUB_OUTPUT file and a
mocked GitHub API.
"""

import json
import pytest
from unittest.mock import Mock, patch

from codeowners_checker.api import CoverageCheckAPI, main, EXIT_PASSED, EXIT_UNCOVERED, EXIT_ERROR
from codeowners_checker.config import AppConfig, CheckConfig
from codeowners_checker.github.client import GitHubClient, GitHubAPIError
from codeowners_checker.github.context import ActionContext
from codeowners_checker.models.pull_request import PullRequestFile


CODEOWNERS = """
# Default owners
*           @org/default
*.py        @python-team
/docs/      @docs-team
"""


def make_response(status_code=200, json_data=None):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.headers = {}
    response.content = b'{}' if json_data is not None else b''
    response.json.return_value = json_data
    return response


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """A runner-like workspace for pull request 40 of some-owner/some-repo."""
    github_dir = tmp_path / ".github"
    github_dir.mkdir()
    (github_dir / "CODEOWNERS").write_text(CODEOWNERS, encoding="utf-8")

    event_file = tmp_path / "event.json"
    event_file.write_text(json.dumps({'number': 40, 'action': 'opened'}), encoding="utf-8")
    output_file = tmp_path / "github_output"
    output_file.write_text("", encoding="utf-8")

    for name in ("INPUT_CODEOWNERS_PATH", "INPUT_SKIP_ASTERISK", "INPUT_POST_COMMENT",
                 "GITHUB_API_URL", "GITHUB_TIMEOUT", "LOG_FILE", "LOG_LEVEL",
                 "RUNNER_DEBUG", "DEBUG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GITHUB_TOKEN", "test_token")
    monkeypatch.setenv("GITHUB_REPOSITORY", "some-owner/some-repo")
    monkeypatch.setenv("GITHUB_EVENT_PATH", str(event_file))
    monkeypatch.setenv("GITHUB_EVENT_NAME", "pull_request")
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))
    monkeypatch.chdir(tmp_path)
    return tmp_path


def fake_github(changed_files, comment_status=201):
    """Session.request replacement serving PR files and accepting comments."""
    calls = []

    def request(method, url, **kwargs):
        calls.append((method, url, kwargs))
        if method == 'GET':
            return make_response(200, [{'filename': f, 'status': 'modified'} for f in changed_files])
        if comment_status >= 400:
            return make_response(comment_status, {'message': 'Server Error'})
        return make_response(comment_status, {'id': 1})

    return request, calls


class TestMain:
    """End-to-end tests for main()."""

    def test_all_files_covered(self, workspace, capsys):
        request, calls = fake_github(['src/app.py', 'docs/guide.md', 'Makefile'])

        with patch('requests.Session.request', side_effect=request):
            status = main([])

        assert status == EXIT_PASSED
        assert [c[0] for c in calls] == ['GET']
        assert "::error::" not in capsys.readouterr().out
        assert "uncovered-count=0" in (workspace / "github_output").read_text(encoding="utf-8")

    def test_uncovered_files_with_skip_asterisk(self, workspace, monkeypatch, capsys):
        monkeypatch.setenv("INPUT_SKIP_ASTERISK", "true")
        request, calls = fake_github(['src/app.py', 'docs/guide.md', 'Makefile', 'web/app.js'])

        with patch('requests.Session.request', side_effect=request):
            status = main([])

        assert status == EXIT_UNCOVERED
        assert [c[0] for c in calls] == ['GET']
        out = capsys.readouterr().out
        assert "::error::The following files do not have CODEOWNER%0A- Makefile%0A- web/app.js" in out

        outputs = (workspace / "github_output").read_text(encoding="utf-8")
        assert "uncovered-count=2" in outputs
        assert "Makefile\nweb/app.js\n" in outputs

    def test_posts_comment_when_enabled(self, workspace, monkeypatch):
        monkeypatch.setenv("INPUT_SKIP_ASTERISK", "true")
        monkeypatch.setenv("INPUT_POST_COMMENT", "true")
        request, calls = fake_github(['src/app.py', 'Makefile'])

        with patch('requests.Session.request', side_effect=request):
            status = main([])

        assert status == EXIT_UNCOVERED
        method, url, kwargs = calls[-1]
        assert method == 'POST'
        assert url == 'https://api.github.com/repos/some-owner/some-repo/issues/40/comments'
        assert kwargs['json'] == {'body': 'The following files do not have CODEOWNER\n- Makefile'}

    def test_custom_codeowners_path(self, workspace, monkeypatch):
        (workspace / "OWNERS").write_text("*.md @docs\n", encoding="utf-8")
        monkeypatch.setenv("INPUT_CODEOWNERS_PATH", "OWNERS")
        request, _ = fake_github(['README.md', 'setup.py'])

        with patch('requests.Session.request', side_effect=request):
            assert main([]) == EXIT_UNCOVERED

    def test_missing_codeowners_file(self, workspace, monkeypatch, capsys):
        monkeypatch.setenv("INPUT_CODEOWNERS_PATH", "missing/CODEOWNERS")
        request, calls = fake_github(['src/app.py'])

        with patch('requests.Session.request', side_effect=request):
            status = main([])

        assert status == EXIT_ERROR
        assert calls == []
        assert "CODEOWNERS file missing/CODEOWNERS not exist." in capsys.readouterr().out

    def test_missing_token(self, workspace, monkeypatch, capsys):
        monkeypatch.delenv("GITHUB_TOKEN")

        with patch('requests.Session.request') as mock_request:
            status = main([])

        assert status == EXIT_ERROR
        mock_request.assert_not_called()
        assert "::error::Configuration error: Failed to read GITHUB_TOKEN" in capsys.readouterr().out

    def test_comment_failure_fails_run(self, workspace, monkeypatch, capsys):
        monkeypatch.setenv("INPUT_SKIP_ASTERISK", "true")
        monkeypatch.setenv("INPUT_POST_COMMENT", "true")
        request, calls = fake_github(['Makefile'], comment_status=500)

        with patch('requests.Session.request', side_effect=request):
            status = main([])

        assert status == EXIT_ERROR
        assert [c[0] for c in calls] == ['GET', 'POST']
        assert "::error::GitHub API error" in capsys.readouterr().out
        outputs = (workspace / "github_output").read_text(encoding="utf-8")
        assert "uncovered-count=1" in outputs
        assert "Makefile\n" in outputs

    def test_malformed_event_file(self, workspace, capsys):
        (workspace / "event.json").write_text("{bad json", encoding="utf-8")

        with patch('requests.Session.request') as mock_request:
            status = main([])

        assert status == EXIT_ERROR
        mock_request.assert_not_called()
        assert "::error::Configuration error: Failed to read event payload" in capsys.readouterr().out

    @pytest.mark.parametrize("number", [0, -3])
    def test_non_positive_pr_number(self, workspace, number):
        (workspace / "event.json").write_text(json.dumps({'number': number}), encoding="utf-8")

        with patch('requests.Session.request') as mock_request:
            assert main([]) == EXIT_ERROR
        mock_request.assert_not_called()

    def test_non_json_files_response(self, workspace, capsys):
        response = make_response(200, [])
        response.content = b'<html>Unicorn!</html>'
        response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")

        with patch('requests.Session.request', return_value=response):
            status = main([])

        assert status == EXIT_ERROR
        assert "::error::GitHub API error: Malformed JSON response" in capsys.readouterr().out

    def test_non_numeric_timeout(self, workspace, monkeypatch, capsys):
        monkeypatch.setenv("GITHUB_TIMEOUT", "abc")

        with patch('requests.Session.request') as mock_request:
            status = main([])

        assert status == EXIT_ERROR
        mock_request.assert_not_called()
        assert "GITHUB_TIMEOUT must be an integer" in capsys.readouterr().out

    def test_codeowners_path_is_directory(self, workspace, monkeypatch):
        monkeypatch.setenv("INPUT_CODEOWNERS_PATH", ".github")
        request, calls = fake_github(['src/app.py'])

        with patch('requests.Session.request', side_effect=request):
            assert main([]) == EXIT_ERROR
        assert calls == []

    def test_yaml_config(self, workspace):
        config_file = workspace / "check.yaml"
        config_file.write_text("check:\n  skip_asterisk: true\n", encoding="utf-8")
        request, _ = fake_github(['Makefile'])

        with patch('requests.Session.request', side_effect=request):
            assert main(['--config', str(config_file)]) == EXIT_UNCOVERED


class TestCoverageCheckAPI:
    """Tests for CoverageCheckAPI with an injected client."""

    def test_run_returns_report(self, workspace):
        client = Mock(spec=GitHubClient)
        client.list_pull_request_files.return_value = [
            PullRequestFile(filename='src/app.py'),
            PullRequestFile(filename='Makefile'),
        ]
        config = AppConfig(check=CheckConfig(skip_asterisk=True, post_comment=False))

        report = CoverageCheckAPI(config, client=client).run(
            ActionContext(payload={'number': 40}, repository='some-owner/some-repo')
        )

        assert report.repository == 'some-owner/some-repo'
        assert report.pr_number == 40
        assert report.checked_files == ['src/app.py', 'Makefile']
        assert report.uncovered_files == ['Makefile']
        assert report.patterns_loaded == 2
        assert report.comment_posted is False
        client.list_pull_request_files.assert_called_once_with('some-owner', 'some-repo', 40)
        client.create_issue_comment.assert_not_called()

    def test_listing_failure_propagates(self, workspace):
        client = Mock(spec=GitHubClient)
        client.list_pull_request_files.side_effect = GitHubAPIError("boom", status_code=500)

        with pytest.raises(GitHubAPIError):
            CoverageCheckAPI(AppConfig(), client=client).run(
                ActionContext(payload={'number': 40}, repository='some-owner/some-repo')
            )
