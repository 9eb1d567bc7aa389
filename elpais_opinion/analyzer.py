"""
elpais_opinion/analyzer.py
--------------------------
WordAnalyzer — counts word frequency across one session's translated
headers and keeps the words that appear more than the threshold.
"""

import re
from collections import Counter

from elpais_opinion import config


class WordAnalyzer:
    """Analyses word frequency in a list of translated headers."""

    def __init__(self, threshold: int = config.REPEAT_THRESHOLD):
        """
        Args:
            threshold: Report words that appear STRICTLY MORE THAN this number.
        """
        self.threshold = threshold

    @staticmethod
    def count_words(headers: list[str]) -> dict[str, int]:
        """Lower-case, split on whitespace, strip punctuation, count."""
        counter: Counter = Counter()
        for header in headers:
            for word in header.lower().split():
                cleaned = re.sub(r"[^\w\s]", "", word)
                if cleaned:
                    counter[cleaned] += 1
        return dict(counter)

    def analyze(self, headers: list[str]) -> dict[str, int]:
        """Return {word: count} for words appearing > threshold times."""
        return {
            w: c for w, c in self.count_words(headers).items() if c > self.threshold
        }

    def print_report(self, label: str, repeated: dict[str, int]) -> None:
        """Print a formatted frequency table to the console."""
        print(f"\n  [{label}] Repeated words in translated headers:")

        if not repeated:
            print(f"    No words appear more than {self.threshold} time(s).")
            return

        sorted_words = sorted(repeated.items(), key=lambda x: (-x[1], x[0]))
        print(f"    {'WORD':<25} {'COUNT':>5}")
        print(f"    {'-'*25} {'-'*5}")
        for word, count in sorted_words:
            print(f"    {word:<25} {count:>5}")
