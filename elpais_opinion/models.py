"""
elpais_opinion/models.py
------------------------
Plain data records passed between the session runner, the analyzer and
the JSON writer.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class EnvironmentDescriptor:
    """One BrowserStack browser/OS combination plus a readable label."""

    label: str
    browser_name: str
    os_version: str
    os: str | None = None
    browser_version: str = "latest"
    device: str | None = None     # set for real mobile devices

    @property
    def slug(self) -> str:
        """Filesystem-safe version of the label."""
        return re.sub(r"[^\w]+", "_", self.label).strip("_").lower()

    def capabilities(self, project: str, build: str) -> dict[str, Any]:
        """W3C capabilities with a `bstack:options` block."""
        bs_opts: dict[str, Any] = {
            "osVersion": self.os_version,
            "sessionName": self.label,
            "projectName": project,
            "buildName": build,
        }
        if self.device:
            bs_opts["deviceName"] = self.device
            bs_opts["realMobile"] = "true"
        else:
            bs_opts["os"] = self.os
            bs_opts["browserVersion"] = self.browser_version
        return {"browserName": self.browser_name, "bstack:options": bs_opts}


@dataclass(frozen=True)
class ArticleRecord:
    """One captured article; written out unchanged."""

    original_title: str
    translated_title: str
    content: str
    cover_image: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "originalTitle":   self.original_title,
            "translatedTitle": self.translated_title,
            "content":         self.content,
            "coverImage":      self.cover_image,
        }


@dataclass
class SessionResult:
    """Everything one session writes to disk."""

    articles: list[ArticleRecord] = field(default_factory=list)
    repeated_words: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "articles": [a.to_dict() for a in self.articles],
            "repeatedWords": dict(self.repeated_words),
        }

    def save(self, path: Path) -> Path:
        """Write the result as indented UTF-8 JSON and return *path*."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fh:
            json.dump(self.to_dict(), fh, indent=2, ensure_ascii=False)
        return path
