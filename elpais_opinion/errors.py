"""
elpais_opinion/errors.py
------------------------
Failure kinds seen while scraping.

Only `SessionConnectionError` is ever raised. The warning classes name the
recoverable degradations; they are printed through `report()` and the run
carries on with a fallback value.
"""


class SessionConnectionError(ConnectionError):
    """A remote session could not be established after every retry."""

    def __init__(self, message: str, last_error: BaseException | None = None):
        super().__init__(message)
        self.last_error = last_error


class ScrapeWarning(UserWarning):
    """Base class for recoverable scraping problems."""


class NavigationWarning(ScrapeWarning):
    """Cookie banner or section link missing / not clickable in time."""


class ExtractionWarning(ScrapeWarning):
    """An article field (title, content, image) could not be read."""


class TranslationWarning(ScrapeWarning):
    """Translation backend failed; the original text is kept."""


class DownloadWarning(ScrapeWarning):
    """Cover image could not be fetched."""


def report(label: str, category: type[ScrapeWarning], message: str) -> None:
    """Print a recoverable problem with its session label."""
    print(f"  [{label}] ⚠ {category.__name__}: {message}")
