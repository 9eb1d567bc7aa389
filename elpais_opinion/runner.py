"""
elpais_opinion/runner.py
------------------------
Runs the El País Opinion scraper in PARALLEL across BrowserStack
sessions, one per configured browser/device combination.

Usage:
    elpais-opinion
    python -m elpais_opinion.runner

Credentials are read from environment variables (or a .env file):
    BROWSERSTACK_USERNAME
    BROWSERSTACK_ACCESS_KEY
    DEEPL_AUTH_KEY
"""

import asyncio
from typing import Sequence

from elpais_opinion import config
from elpais_opinion.browser import open_remote_browser
from elpais_opinion.models import EnvironmentDescriptor, SessionResult
from elpais_opinion.scraper import Connector, SessionRunner
from elpais_opinion.translator import ArticleTranslator


async def run_all(
    settings: config.Settings,
    environments: Sequence[EnvironmentDescriptor] = config.ENVIRONMENTS,
    *,
    connect: Connector = open_remote_browser,
    translator: ArticleTranslator | None = None,
) -> list[SessionResult | None]:
    """
    Start one SessionRunner per environment and wait for all of them.
    Results come back in *environments* order; None marks a failed session.
    """
    translator = translator or ArticleTranslator(settings.deepl_auth_key)
    runners = [
        SessionRunner(env, settings, translator, connect=connect) for env in environments
    ]
    tasks = [asyncio.create_task(r.run(), name=r.label) for r in runners]
    results = await asyncio.gather(*tasks)

    _print_summary(runners, results)
    print("All sessions completed.")
    return list(results)


def _print_summary(runners: list[SessionRunner], results: list[SessionResult | None]) -> None:
    print("\n" + "=" * 65)
    print("  SESSION STATUS SUMMARY")
    print("=" * 65)
    print(f"  {'#':<3} {'Session':<42} {'Status'}")
    print(f"  {'-'*3} {'-'*42} {'-'*8}")
    for idx, (runner, result) in enumerate(zip(runners, results), start=1):
        if result is None:
            status = "❌ FAILED"
        else:
            status = f"✅ PASSED ({len(result.articles)} article(s))"
        print(f"  {idx:<3} {runner.label:<42} {status}")
    print()


# ── Main ─────────────────────────────────────────────────────────────────────

def main() -> None:
    settings = config.load_settings()

    print("=" * 65)
    print("  EL PAÍS OPINION SCRAPER — BrowserStack Parallel Run")
    print(f"  Username : {settings.bs_username or '(not set)'}")
    print(f"  Sessions : {len(config.ENVIRONMENTS)}")
    print(f"  Output   : {settings.output_dir}")
    print("=" * 65)

    asyncio.run(run_all(settings))


if __name__ == "__main__":
    main()
