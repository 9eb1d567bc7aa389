"""Shared fixtures for the scraper tests."""

import pytest

from elpais_opinion import config
from elpais_opinion import scraper as scraper_module
from elpais_opinion.config import Settings
from elpais_opinion.models import EnvironmentDescriptor


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        bs_username="user",
        bs_access_key="key",
        deepl_auth_key="",
        output_dir=tmp_path / "output",
    )


@pytest.fixture
def environment() -> EnvironmentDescriptor:
    return EnvironmentDescriptor(
        label="Chrome Test on Windows 10 (Desktop)",
        browser_name="Chrome", os="Windows", os_version="10",
    )


@pytest.fixture(autouse=True)
def no_connect_delay(monkeypatch):
    """Connection retries would otherwise pause five seconds each."""
    monkeypatch.setattr(config, "CONNECT_DELAY_MS", 0)


@pytest.fixture
def downloads(monkeypatch):
    """
    Replace the image download with a recorder. Returns the list of
    (url, path) pairs; URLs containing "broken" raise instead.
    """
    import requests

    calls: list[tuple[str, str]] = []

    def fake_download(url, path):
        calls.append((url, str(path)))
        if "broken" in url:
            raise requests.ConnectionError("connection reset")
        return str(path)

    monkeypatch.setattr(scraper_module, "download_image", fake_download)
    return calls
