"""Shared fixtures for the harvester test suite."""

import logging

import pytest

from core.config import ENV_VARS, reset_config
from core.errors import FetchError
from harvesters.page_fetcher import build_definition_url


def definition_page(*definitions, marker="dict"):
    """Search results page with one ordered definition list per entry"""
    blocks = "".join(
        f'<ol class="{marker}">{"".join(f"<li>{d}</li>" for d in items)}</ol>'
        for items in definitions
    )
    return f"<html><head><title>define</title></head><body><div id='res'>{blocks}</div></body></html>"


class FakeFetcher:
    """Serves canned pages by word; words mapped to an int answer with that HTTP status"""

    def __init__(self, pages, on_fetch=None):
        self.pages = pages
        self.on_fetch = on_fetch
        self.urls = []

    def fetch(self, url):
        self.urls.append(url)
        if self.on_fetch is not None:
            self.on_fetch(url)
        for word, page in self.pages.items():
            if build_definition_url(word) == url:
                if isinstance(page, int):
                    raise FetchError(url, status_code=page)
                return page
        raise FetchError(url, status_code=404)

    def close(self):
        pass


class CountingPacing:
    def __init__(self):
        self.calls = 0

    def wait(self):
        self.calls += 1


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep host environment and stray config files out of every test"""
    for env_var in ENV_VARS:
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.delenv("HARVEST_CONFIG_FILE", raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config()
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    reset_config()
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
