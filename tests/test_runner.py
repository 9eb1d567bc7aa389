"""Tests for the parallel orchestrator."""

import asyncio

import pytest
from urllib3.exceptions import MaxRetryError

from elpais_opinion import config
from elpais_opinion.models import EnvironmentDescriptor
from elpais_opinion.runner import run_all
from tests.fakes import FakeBrowser, FakeTranslator


ENVS = [
    EnvironmentDescriptor("Chrome Desktop", "Chrome", "10", os="Windows"),
    EnvironmentDescriptor("Edge Desktop", "Edge", "10", os="Windows"),
    EnvironmentDescriptor("Safari Mobile", "Safari", "14", device="iPhone 12"),
]

URL = "https://elpais.com/opinion/2024-05-01/articulo.html"


class SlowBrowser(FakeBrowser):
    """Yields to the event loop on every sleep, so sessions interleave."""

    def __init__(self, log: list[str], name: str, **kwargs):
        super().__init__(**kwargs)
        self.log = log
        self.name = name

    async def sleep(self, seconds):
        self.log.append(self.name)
        await asyncio.sleep(0)
        await super().sleep(seconds)


class UnmarkableBrowser(FakeBrowser):
    """Loses the hub connection when the session status is reported."""

    async def mark_status(self, passed, reason):
        raise MaxRetryError(None, "/session/abc/execute/sync", reason="connection reset")

class TestRunAll:
    @pytest.mark.asyncio
    async def test_every_session_reaches_closed(self, settings, downloads, capsys) -> None:
        """The join shall complete only after all sessions, good and bad, are done."""
        browsers = {
            env.label: FakeBrowser(listing=[URL], pages={URL: {"title": env.label}})
            for env in ENVS
        }
        connects: list[str] = []

        def connect(env, settings):
            connects.append(env.label)
            if env.label == "Edge Desktop":
                raise ConnectionRefusedError("no Edge capacity")
            return browsers[env.label]

        results = await run_all(
            settings, ENVS, connect=connect, translator=FakeTranslator()
        )

        assert len(results) == 3
        assert results[0] is not None and results[2] is not None
        assert results[1] is None
        assert connects.count("Edge Desktop") == config.CONNECT_ATTEMPTS
        assert browsers["Chrome Desktop"].closed == 1
        assert browsers["Safari Mobile"].closed == 1
        assert browsers["Edge Desktop"].closed == 0

        out = capsys.readouterr().out
        assert out.rstrip().endswith("All sessions completed.")
        assert "SESSION STATUS SUMMARY" in out

    @pytest.mark.asyncio
    async def test_each_session_writes_its_own_file(self, settings, downloads) -> None:
        browsers = {
            env.label: FakeBrowser(listing=[URL], pages={URL: {"title": env.label}})
            for env in ENVS
        }

        await run_all(
            settings, ENVS,
            connect=lambda env, s: browsers[env.label],
            translator=FakeTranslator(),
        )

        files = sorted(p.name for p in settings.output_dir.glob("scraped_data_*.json"))
        assert files == sorted(f"scraped_data_{env.slug}.json" for env in ENVS)

    @pytest.mark.asyncio
    async def test_sessions_run_concurrently(self, settings, downloads) -> None:
        """Sessions shall interleave at their suspension points."""
        log: list[str] = []
        browsers = {
            env.label: SlowBrowser(log, env.label, listing=[URL], pages={URL: {"title": "t"}})
            for env in ENVS
        }

        await run_all(
            settings, ENVS,
            connect=lambda env, s: browsers[env.label],
            translator=FakeTranslator(),
        )

        all_started = max(log.index(env.label) for env in ENVS)
        first_session_done = len(log) - 1 - log[::-1].index(ENVS[0].label)
        assert all_started < first_session_done

    @pytest.mark.asyncio
    async def test_no_environments(self, settings) -> None:
        assert await run_all(settings, [], translator=FakeTranslator()) == []

    @pytest.mark.asyncio
    async def test_teardown_transport_error_does_not_break_join(self, settings, downloads, capsys) -> None:
        """A session whose status report fails shall still close, and the join shall finish."""
        browsers = {
            env.label: FakeBrowser(listing=[URL], pages={URL: {"title": env.label}})
            for env in ENVS
        }
        browsers["Edge Desktop"] = UnmarkableBrowser(listing=[URL], pages={URL: {"title": "Edge"}})

        results = await run_all(
            settings, ENVS,
            connect=lambda env, s: browsers[env.label],
            translator=FakeTranslator(),
        )

        assert all(r is not None for r in results)
        assert all(b.closed == 1 for b in browsers.values())
        out = capsys.readouterr().out
        assert "Could not set session status" in out
        assert out.rstrip().endswith("All sessions completed.")
