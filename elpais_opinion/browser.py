"""
elpais_opinion/browser.py
-------------------------
RemoteBrowser — async face over a blocking Selenium WebDriver.

Every driver call runs in a worker thread so several BrowserStack
sessions can progress side by side on one event loop. Lookups never
raise: a missing or unreadable element comes back as None (or an empty
list) and the caller decides whether to skip.
"""
import asyncio
import json

import urllib3
from selenium import webdriver
from selenium.common.exceptions import (
    NoSuchElementException, TimeoutException, WebDriverException
)
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from elpais_opinion import config
from elpais_opinion.locators import Locator
from elpais_opinion.models import EnvironmentDescriptor

# A lost hub connection surfaces as urllib3/socket errors, not WebDriverException
SESSION_ERRORS = (WebDriverException, urllib3.exceptions.HTTPError, OSError)


class RemoteBrowser:
    """One live browser session."""

    def __init__(self, driver: WebDriver):
        self.driver = driver

    # ── Navigation ────────────────────────────────────────────────────────────

    async def get(self, url: str) -> None:
        await asyncio.to_thread(self.driver.get, url)

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)

    async def execute(self, script: str, *args):
        return await asyncio.to_thread(self.driver.execute_script, script, *args)

    # ── Lookups ───────────────────────────────────────────────────────────────

    async def find(
        self, locator: Locator, timeout: float | None = None, clickable: bool = False
    ) -> WebElement | None:
        """Single element, optionally waiting up to *timeout* seconds."""
        return await asyncio.to_thread(self._find, locator, timeout, clickable)

    async def find_all(self, locator: Locator) -> list[WebElement] | None:
        """All matches (possibly none), or None if the query itself failed."""
        try:
            return await asyncio.to_thread(self.driver.find_elements, *locator)
        except SESSION_ERRORS:
            return None

    async def attribute(self, element: WebElement, name: str) -> str | None:
        try:
            return await asyncio.to_thread(element.get_attribute, name)
        except SESSION_ERRORS:
            return None

    async def text(self, element: WebElement) -> str | None:
        try:
            return await asyncio.to_thread(lambda: element.text)
        except SESSION_ERRORS:
            return None

    async def click(self, element: WebElement) -> bool:
        try:
            await asyncio.to_thread(element.click)
            return True
        except SESSION_ERRORS:
            return False

    # ── Teardown ──────────────────────────────────────────────────────────────

    async def mark_status(self, passed: bool, reason: str) -> None:
        """Best-effort pass/fail marker on the BrowserStack dashboard."""
        payload = {
            "action": "setSessionStatus",
            "arguments": {"status": "passed" if passed else "failed", "reason": reason},
        }
        try:
            await self.execute(f"browserstack_executor: {json.dumps(payload)}")
        except Exception as exc:
            print(f"  Could not set session status: {exc}")

    async def close(self) -> None:
        try:
            await asyncio.to_thread(self.driver.quit)
        except Exception as exc:
            print(f"  Error while closing session: {exc}")

    # ── Helper ────────────────────────────────────────────────────────────────

    def _find(self, locator: Locator, timeout: float | None, clickable: bool):
        try:
            if not timeout:
                return self.driver.find_element(*locator)
            condition = (
                EC.element_to_be_clickable(locator) if clickable
                else EC.presence_of_element_located(locator)
            )
            return WebDriverWait(self.driver, timeout).until(condition)
        except (TimeoutException, NoSuchElementException):
            return None
        except SESSION_ERRORS as exc:
            print(f"  Lookup {locator[1]!r} failed: {exc}")
            return None


# ── Session factory ──────────────────────────────────────────────────────────

def build_options(env: EnvironmentDescriptor):
    """
    Convert a descriptor into the matching WebDriver Options object.
    BrowserStack W3C format: capabilities go into the options object directly.
    """
    from selenium.webdriver.chrome.options import Options as ChromeOptions
    from selenium.webdriver.edge.options import Options as EdgeOptions
    from selenium.webdriver.firefox.options import Options as FirefoxOptions
    from selenium.webdriver.safari.options import Options as SafariOptions

    browser = env.browser_name.lower()

    if browser == "firefox":
        opts = FirefoxOptions()
    elif browser == "safari":
        opts = SafariOptions()
    elif browser == "edge":
        opts = EdgeOptions()
    else:
        opts = ChromeOptions()

    caps = env.capabilities(config.BS_PROJECT, config.BS_BUILD)
    opts.set_capability("browserName", caps["browserName"])
    opts.set_capability("bstack:options", caps["bstack:options"])
    if not env.device:
        opts.browser_version = env.browser_version
    return opts


def open_remote_browser(env: EnvironmentDescriptor, settings: config.Settings) -> RemoteBrowser:
    """
    Start a BrowserStack session for *env*. Blocking; run it in a thread.
    A driver whose setup fails after creation is quit before re-raising.
    """
    driver = webdriver.Remote(command_executor=settings.hub_url, options=build_options(env))
    try:
        driver.set_page_load_timeout(config.PAGE_LOAD_TIMEOUT)
    except WebDriverException:
        driver.quit()
        raise
    return RemoteBrowser(driver)
