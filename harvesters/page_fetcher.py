#!/usr/bin/env python3
"""
Definition page fetching.

A single GET per word with a desktop browser User-Agent. Connection resets
and timeouts are retried with exponential backoff; any HTTP status outside
2xx is final for that word.
"""

import logging
from typing import Optional

import requests
from requests.utils import _parse_content_type_header
from tenacity import RetryError, Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from core.config import DEFAULT_URL_TEMPLATE, DEFAULT_USER_AGENT
from core.errors import FetchError

logger = logging.getLogger(__name__)

TRANSPORT_ERRORS = (requests.ConnectionError, requests.Timeout)


def build_definition_url(word: str, template: str = DEFAULT_URL_TEMPLATE) -> str:
    """Search URL for ``word``; requests percent-encodes it when sent."""
    return template % word


class PageFetcher:
    """Fetch raw definition pages from the search service."""

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30,
        max_attempts: int = 3,
        default_charset: str = 'ISO-8859-1',
        session: Optional[requests.Session] = None,
        retry_wait=None,
    ):
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.default_charset = default_charset
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({'User-Agent': user_agent})
        self.retry_wait = retry_wait if retry_wait is not None else wait_exponential(min=1, max=10)

    def fetch(self, url: str) -> str:
        """Return the decoded body of ``url`` or raise FetchError."""
        try:
            for attempt in Retrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=self.retry_wait,
                retry=retry_if_exception_type(TRANSPORT_ERRORS),
            ):
                with attempt:
                    if attempt.retry_state.attempt_number > 1:
                        logger.info(f"Retrying {url} (attempt {attempt.retry_state.attempt_number})")
                    response = self.session.get(url, timeout=self.timeout)
        except RetryError as e:
            cause = e.last_attempt.exception()
            raise FetchError(url, cause=cause) from cause
        except requests.RequestException as e:
            raise FetchError(url, cause=e) from e

        if not 200 <= response.status_code < 300:
            raise FetchError(url, status_code=response.status_code)

        return self.decode(response)

    @staticmethod
    def declared_charset(response: requests.Response) -> Optional[str]:
        """Charset parameter of the Content-Type header, if the server sent one"""
        content_type = response.headers.get('Content-Type')
        if not content_type:
            return None
        _, params = _parse_content_type_header(content_type)
        charset = params.get('charset')
        if not isinstance(charset, str):
            return None
        return charset.strip("'\" ") or None

    def decode(self, response: requests.Response) -> str:
        """Decode with the declared charset, falling back to the legacy default."""
        charset = self.declared_charset(response) or self.default_charset
        try:
            return response.content.decode(charset, errors='replace')
        except LookupError:
            logger.warning(f"Unknown charset {charset!r} declared by {response.url}; using {self.default_charset}")
            return response.content.decode(self.default_charset, errors='replace')

    def close(self):
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
