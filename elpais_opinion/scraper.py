"""
elpais_opinion/scraper.py
-------------------------
SessionRunner — drives one BrowserStack session through the El País
Opinion section: connect, navigate, capture up to five articles,
translate their titles, download cover images, count repeated words,
write the session's JSON file and always release the browser.

Only a connection failure ends a session early. Every other problem is
reported and the affected field (or article) is skipped.
"""
from __future__ import annotations

import asyncio
import enum
from pathlib import Path
from typing import Callable

import requests

from elpais_opinion import config
from elpais_opinion.analyzer import WordAnalyzer
from elpais_opinion.browser import SESSION_ERRORS, RemoteBrowser, open_remote_browser
from elpais_opinion.errors import (
    DownloadWarning, ExtractionWarning, NavigationWarning, SessionConnectionError, report
)
from elpais_opinion.locators import ELPAIS, PageLocators
from elpais_opinion.models import ArticleRecord, EnvironmentDescriptor, SessionResult
from elpais_opinion.retry import attempt
from elpais_opinion.translator import ArticleTranslator

Connector = Callable[[EnvironmentDescriptor, config.Settings], RemoteBrowser]


class Phase(enum.Enum):
    CONNECTING = "connecting"
    HOME = "home"
    SECTION = "section"
    LINKS = "links"
    ARTICLE = "article"
    AGGREGATING = "aggregating"
    PERSISTING = "persisting"
    CLOSED = "closed"


class SessionRunner:
    """Scrapes the Opinion section once, inside one remote browser session."""

    def __init__(
        self,
        environment: EnvironmentDescriptor,
        settings: config.Settings,
        translator: ArticleTranslator,
        connect: Connector = open_remote_browser,
        locators: PageLocators = ELPAIS,
    ):
        """
        Args:
            environment: Browser/OS combination to request from the hub.
            settings:    Credentials and output locations.
            translator:  Shared, stateless title translator.
            connect:     Blocking session factory; swapped out in tests.
            locators:    Site URLs and selectors.
        """
        self.environment = environment
        self.settings = settings
        self.translator = translator
        self.connect = connect
        self.locators = locators
        self.label = environment.label
        self.phase = Phase.CONNECTING
        self.browser: RemoteBrowser | None = None

    @property
    def output_path(self) -> Path:
        return self.settings.output_dir / f"scraped_data_{self.environment.slug}.json"

    @property
    def images_dir(self) -> Path:
        return self.settings.images_dir / self.environment.slug

    # ── Public API ────────────────────────────────────────────────────────────

    async def run(self) -> SessionResult | None:
        """
        Full session. Returns the persisted result, or None when the
        session failed. Never raises.
        """
        print(f"\n[{self.label}] Starting session")
        passed = False
        try:
            self.browser = await self._connect()
            await self._open_home()
            await self._open_section()
            links = await self._collect_links()
            articles = await self._scrape_articles(links)
            result = self._aggregate(articles)
            self._persist(result)
            passed = True
            print(f"[{self.label}] ✅ PASSED: {len(result.articles)} article(s)")
            return result
        except SessionConnectionError as exc:
            print(f"[{self.label}] ❌ FAILED: could not connect: {exc}")
            return None
        except Exception as exc:
            print(f"[{self.label}] ❌ FAILED during {self.phase.value}: {exc}")
            return None
        finally:
            await self._teardown(passed)

    # ── Phases ────────────────────────────────────────────────────────────────

    async def _connect(self) -> RemoteBrowser:
        self.phase = Phase.CONNECTING
        browser = await attempt(
            lambda: asyncio.to_thread(self.connect, self.environment, self.settings),
            max_attempts=config.CONNECT_ATTEMPTS,
            delay_ms=config.CONNECT_DELAY_MS,
            label=self.label,
        )
        print(f"  [{self.label}] Running test on {self.environment.browser_name}...")
        return browser

    async def _open_home(self) -> None:
        self.phase = Phase.HOME
        await self.browser.get(self.locators.home_url)

        button = await self.browser.find(
            self.locators.consent_button, timeout=config.CONSENT_WAIT, clickable=True
        )
        if button is None or not await self.browser.click(button):
            report(self.label, NavigationWarning, "no cookies dialog detected")
            return
        print(f"  [{self.label}] Consent banner dismissed.")

    async def _open_section(self) -> None:
        """
        Click through to Opinión with a script click; overlapping ads and
        sticky headers make a native click unreliable.
        """
        self.phase = Phase.SECTION
        link = await self.browser.find(self.locators.section_link, timeout=config.SECTION_WAIT)
        if link is None:
            report(self.label, NavigationWarning, "Opinion link not found")
            return
        try:
            await self.browser.execute("arguments[0].scrollIntoView(true);", link)
            await self.browser.sleep(config.SCROLL_SETTLE)
            await self.browser.execute("arguments[0].click();", link)
        except SESSION_ERRORS as exc:
            report(self.label, NavigationWarning, f"could not open Opinion section: {exc}")
            return
        print(f"  [{self.label}] Navigated to Opinion section.")

    async def _collect_links(self) -> list[str]:
        """First MAX_ARTICLES distinct article hrefs, in document order."""
        self.phase = Phase.LINKS
        await self.browser.sleep(config.SECTION_SETTLE)

        anchors = await self.browser.find_all(self.locators.listing) or []
        links: list[str] = []
        for anchor in anchors:
            href = await self.browser.attribute(anchor, "href")
            if href and href.endswith(config.ARTICLE_SUFFIX) and href not in links:
                links.append(href)
            if len(links) >= config.MAX_ARTICLES:
                break

        print(f"  [{self.label}] Filtered article links: {len(links)}")
        for href in links:
            print(f"    {href}")
        return links

    async def _scrape_articles(self, links: list[str]) -> list[ArticleRecord]:
        self.phase = Phase.ARTICLE
        seen_titles: set[str] = set()
        articles: list[ArticleRecord] = []

        for idx, url in enumerate(links[:config.MAX_ARTICLES], start=1):
            try:
                await self.browser.get(url)
            except SESSION_ERRORS as exc:
                report(self.label, ExtractionWarning, f"article {idx}: could not open {url}: {exc}")
                continue
            await self.browser.sleep(config.ARTICLE_SETTLE)

            title = await self._extract_title()
            if title is None:
                report(self.label, ExtractionWarning, f"article {idx}: could not read title")
                continue
            if title in seen_titles:
                continue
            seen_titles.add(title)
            print(f"  [{self.label}] [{idx}] Original Title  : {title}")

            translated = await self.translator.translate(
                title, config.TRANSLATION_TARGET, label=self.label
            )
            print(f"  [{self.label}] [{idx}] Translated Title: {translated}")

            content = await self._extract_content()
            if content is None:
                report(self.label, ExtractionWarning, f"article {idx}: could not read content")
                content = ""

            image = await self._fetch_cover(idx)
            articles.append(ArticleRecord(title, translated, content, image))

        return articles

    def _aggregate(self, articles: list[ArticleRecord]) -> SessionResult:
        self.phase = Phase.AGGREGATING
        analyzer = WordAnalyzer()
        repeated = analyzer.analyze([a.translated_title for a in articles])
        analyzer.print_report(self.label, repeated)
        return SessionResult(articles=articles, repeated_words=repeated)

    def _persist(self, result: SessionResult) -> None:
        self.phase = Phase.PERSISTING
        path = result.save(self.output_path)
        print(f"  [{self.label}] Scraped data saved to {path}")

    async def _teardown(self, passed: bool) -> None:
        self.phase = Phase.CLOSED
        browser, self.browser = self.browser, None
        if browser is None:
            return
        reason = "El País Opinion scrape completed" if passed else "El País Opinion scrape failed"
        try:
            await browser.mark_status(passed, reason)
        except Exception as exc:
            print(f"  [{self.label}] Could not set session status: {exc}")
        try:
            await browser.close()
        except Exception as exc:
            print(f"  [{self.label}] Error while closing session: {exc}")
            return
        print(f"  [{self.label}] Session closed.")

    # ── Per-article extraction ────────────────────────────────────────────────

    async def _extract_title(self) -> str | None:
        el = await self.browser.find(self.locators.article_title)
        if el is None:
            return None
        text = await self.browser.text(el)
        return None if text is None else text.strip()

    async def _extract_content(self) -> str | None:
        paras = await self.browser.find_all(self.locators.article_paragraphs)
        if paras is None:
            return None
        texts = [await self.browser.text(p) or "" for p in paras]
        return "\n".join(texts)

    async def _fetch_cover(self, idx: int) -> str | None:
        img = await self.browser.find(self.locators.cover_image)
        if img is None:
            report(self.label, ExtractionWarning, f"article {idx}: no cover image found")
            return None
        try:
            await self.browser.execute("arguments[0].scrollIntoView(true);", img)
        except SESSION_ERRORS as exc:
            report(self.label, ExtractionWarning, f"article {idx}: could not scroll to image: {exc}")
        await self.browser.sleep(config.IMAGE_SETTLE)

        src = await self.browser.attribute(img, "src")
        if not src or not src.startswith("http"):
            report(self.label, ExtractionWarning, f"article {idx}: cover image has no absolute src")
            return None

        path = self.images_dir / f"article_image_{idx}.jpg"
        try:
            return await asyncio.to_thread(download_image, src, path)
        except (requests.RequestException, OSError) as exc:
            report(self.label, DownloadWarning, f"article {idx}: {exc}")
            return None


def download_image(image_url: str, path: Path) -> str:
    """Stream *image_url* into *path*. Blocking; raises on failure."""
    path.parent.mkdir(parents=True, exist_ok=True)
    resp = requests.get(
        image_url,
        headers={"User-Agent": "Mozilla/5.0"},
        timeout=config.DOWNLOAD_TIMEOUT, stream=True,
    )
    resp.raise_for_status()
    with open(path, "wb") as f:
        for chunk in resp.iter_content(config.DOWNLOAD_CHUNK):
            f.write(chunk)
    return str(path)
