#!/usr/bin/env python3
"""
Error taxonomy for the definition harvester.

Fatal errors (source loading, persistence, bad job numbers) abort a run.
FetchError is recovered per word by the job runner.
"""

from typing import Optional


class HarvestError(Exception):
    """Base class for all harvester errors."""


class SourceLoadError(HarvestError, OSError):
    """Raised when the word list cannot be opened or decoded."""


class FetchError(HarvestError):
    """Raised when a definition page cannot be retrieved."""

    def __init__(self, url: str, status_code: Optional[int] = None,
                 cause: Optional[BaseException] = None):
        self.url = url
        self.status_code = status_code
        self.cause = cause
        if status_code is not None:
            message = f"HTTP {status_code} for {url}"
        elif cause is not None:
            message = f"I/O error for {url}: {cause}"
        else:
            message = f"Request failed for {url}"
        super().__init__(message)


class PersistError(HarvestError, OSError):
    """Raised when a job's output file cannot be written or read back."""


class InvalidJobNumber(HarvestError, ValueError):
    """Raised for a job number that is not a positive integer."""
