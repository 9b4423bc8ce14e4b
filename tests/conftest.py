import pytest
from click.testing import CliRunner

from ceres_lint.exceptions import FetchError


class RecordingLinter:
    """Linter double returning a canned report and recording submitted code."""

    def __init__(self, report: str = "No syntax errors detected in Standard input code"):
        self.report = report
        self.calls: list[str] = []

    def lint(self, code: str) -> str:
        self.calls.append(code)
        return self.report


class StubFetcher:
    """Fetcher double mapping URLs to status lines; unknown URLs fail."""

    def __init__(self, responses: dict[str, str] | None = None):
        self.responses = responses or {}
        self.calls: list[str] = []

    def fetch(self, url: str) -> str:
        self.calls.append(url)
        if url not in self.responses:
            raise FetchError(url, "connection refused")
        return self.responses[url]


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def clean_linter() -> RecordingLinter:
    return RecordingLinter()


@pytest.fixture()
def stub_fetcher() -> StubFetcher:
    return StubFetcher({"https://example.com/ok": "HTTP/1.1 200 OK"})


@pytest.fixture()
def make_linter():
    """Builds a linter double returning `report`."""
    return RecordingLinter


@pytest.fixture()
def make_fetcher():
    """Builds a fetcher double from a URL-to-status-line mapping."""
    return StubFetcher
