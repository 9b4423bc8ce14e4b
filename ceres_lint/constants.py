"""Constants used across the ceres-lint package."""

from __future__ import annotations

import re

from .config import LintConfig

DEFAULT_CONFIG = LintConfig()

DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
DEFAULT_URL_DELAY = DEFAULT_CONFIG.url_delay

# URL detection: scheme prefix plus the unreserved/reserved URI characters
URL_PATTERN = re.compile(r"https?://[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]+")

# Linter report parsing
LINE_REFERENCE_PATTERN = re.compile(r"\s*on line (\d+)")
LINT_ERROR_PREFIX_PATTERN = re.compile(r"^(?:PHP )?(?:Parse|Fatal) error:\s*")
LINT_SOURCE_NAME_PATTERN = re.compile(r"\s+in (?:Standard input code|-)(?=\s+on line|\s*$)")
LINT_TRAILER_PATTERN = re.compile(r"^Errors parsing .*$", re.MULTILINE)
