"""Reachability checks for URLs found in documents."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Protocol

import requests
import urllib3

from .constants import DEFAULT_URL_DELAY, URL_PATTERN
from .exceptions import FetchError
from .models import Diagnostic, Severity

_HTTP_VERSIONS = {10: "HTTP/1.0", 11: "HTTP/1.1", 20: "HTTP/2"}


def find_url(line: str) -> str | None:
    """Return the first URL in `line`, without sentence-ending periods.

    Examples:
        find_url("See https://example.com/docs.")  # "https://example.com/docs"
    """
    match = URL_PATTERN.search(line)
    if not match:
        return None
    url = match.group(0).rstrip(".")
    return url or None


def status_code(status_line: str) -> str:
    """Extract the status code from an HTTP status line.

    Examples:
        status_code("HTTP/1.1 404 Not Found")  # "404"
    """
    parts = status_line.split()
    return parts[1] if len(parts) > 1 else status_line.strip()


class Fetcher(Protocol):
    """Anything that can fetch a URL and report its status line."""

    def fetch(self, url: str) -> str:
        """Return the response status line, or raise `FetchError`."""
        ...


class RequestsFetcher:
    """Fetch URLs with `requests` and report an HTTP status line.

    Args:
        timeout: Seconds to wait for the server.
    """

    def __init__(self, timeout: float = 10.0, session: requests.Session | None = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, url: str) -> str:
        try:
            with self.session.get(
                url, timeout=self.timeout, allow_redirects=True, stream=True
            ) as response:
                raw_version = getattr(response.raw, "version", 11)
                version = _HTTP_VERSIONS.get(raw_version, "HTTP/1.1")
                return f"{version} {response.status_code} {response.reason or ''}".rstrip()
        except (requests.RequestException, urllib3.exceptions.HTTPError, ValueError) as error:
            # urllib3 raises LocationParseError for malformed hosts such as "a..b"
            raise FetchError(url, str(error)) from error


class UrlChecker:
    """Check the first URL on a line and throttle outbound requests.

    Args:
        fetcher: Collaborator performing the request.
        delay: Seconds to pause after each fetch.
        sleep: Pause function, replaceable in tests.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        delay: float = DEFAULT_URL_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.fetcher = fetcher
        self.delay = delay
        self.sleep = sleep

    def check(self, line: str, line_number: int, block_start_line: int = 0) -> Diagnostic | None:
        """Fetch the first URL on `line` and describe the outcome.

        Findings inside a code block are reported at the block's open line.
        Callers pass the block start as it stands after the line was scanned:
        a URL on the open marker line reports that line, and a URL on the
        close marker line reports its own line since the block is closed.

        Returns:
            Diagnostic | None: A notice with the status code, an error when the
                URL could not be reached, or None when the line has no URL.
        """
        url = find_url(line)
        if url is None:
            return None

        reported_line = block_start_line or line_number
        try:
            status_line = self.fetcher.fetch(url)
        except FetchError:
            diagnostic = Diagnostic(reported_line, Severity.ERROR, "found URL, could not access")
        else:
            diagnostic = Diagnostic(
                reported_line,
                Severity.NOTICE,
                f"found URL, response status {status_code(status_line)}",
            )
        finally:
            if self.delay:
                self.sleep(self.delay)

        return diagnostic
