"""
elpais_opinion/config.py
------------------------
Central configuration for the El País Opinion scraper.

Tunable constants live at module level; credentials and output locations
are collected into a `Settings` object by `load_settings()` and passed
explicitly to the orchestrator, the session runners and the translator.
"""
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from elpais_opinion.models import EnvironmentDescriptor


# ── Scraping ─────────────────────────────────────────────────────────────────
MAX_ARTICLES = 5          # Articles captured per session
ARTICLE_SUFFIX = ".html"  # Only hrefs ending in this are real articles

# ── Browser / Timeouts (seconds) ─────────────────────────────────────────────
PAGE_LOAD_TIMEOUT = 30    # driver.get() gives up after this
CONSENT_WAIT      = 5     # cookie banner lookup
SECTION_WAIT      = 20    # "Opinión" link lookup

# ── Settle delays (seconds) ──────────────────────────────────────────────────
SCROLL_SETTLE  = 1        # after scrolling the section link into view
SECTION_SETTLE = 3        # after clicking through to the section page
ARTICLE_SETTLE = 5        # after opening each article
IMAGE_SETTLE   = 2        # after scrolling the cover image into view

# ── Connection retry ─────────────────────────────────────────────────────────
CONNECT_ATTEMPTS = 3
CONNECT_DELAY_MS = 5000

# ── Translation ──────────────────────────────────────────────────────────────
TRANSLATION_TARGET = "en-US"
TRANSLATION_TIMEOUT = 10

# ── Word-frequency analysis ──────────────────────────────────────────────────
# Report words that appear STRICTLY MORE THAN this many times
REPEAT_THRESHOLD = 2

# ── Image download ───────────────────────────────────────────────────────────
DOWNLOAD_TIMEOUT = 15
DOWNLOAD_CHUNK   = 8192

# ── BrowserStack ─────────────────────────────────────────────────────────────
BS_HUB_HOST = "hub-cloud.browserstack.com"
BS_PROJECT  = "ElPais Opinion Scraper"
BS_BUILD    = "Cross-Browser Testing"

# 5 browser/device combinations (3 desktop + 2 real mobile)
ENVIRONMENTS: tuple[EnvironmentDescriptor, ...] = (
    EnvironmentDescriptor(
        label="Chrome Test on Windows 10 (Desktop)",
        browser_name="Chrome", os="Windows", os_version="10",
    ),
    EnvironmentDescriptor(
        label="Chrome Test on Android (Mobile)",
        browser_name="Chrome", os_version="10.0",
        device="Samsung Galaxy S20",
    ),
    EnvironmentDescriptor(
        label="Edge Test on Windows 10 (Desktop)",
        browser_name="Edge", os="Windows", os_version="10",
    ),
    EnvironmentDescriptor(
        label="Firefox Test on MacOS Monterey (Desktop)",
        browser_name="Firefox", os="OS X", os_version="Monterey",
    ),
    EnvironmentDescriptor(
        label="Safari Test on iOS (Mobile)",
        browser_name="Safari", os_version="14",
        device="iPhone 12",
    ),
)


@dataclass(frozen=True)
class Settings:
    """Credentials and output locations for one run."""

    bs_username: str = ""
    bs_access_key: str = ""
    deepl_auth_key: str = ""
    output_dir: Path = Path("output")

    @property
    def hub_url(self) -> str:
        return f"https://{self.bs_username}:{self.bs_access_key}@{BS_HUB_HOST}/wd/hub"

    @property
    def images_dir(self) -> Path:
        return self.output_dir / "images"


def load_settings() -> Settings:
    """Read credentials from the environment (or a .env file)."""
    load_dotenv()
    return Settings(
        bs_username=os.getenv("BROWSERSTACK_USERNAME", ""),
        bs_access_key=os.getenv("BROWSERSTACK_ACCESS_KEY", ""),
        deepl_auth_key=os.getenv("DEEPL_AUTH_KEY", "").strip(),
        output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
    )
