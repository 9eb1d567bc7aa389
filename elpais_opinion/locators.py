"""
elpais_opinion/locators.py
--------------------------
Where things live on elpais.com. A site redesign should only need edits
here, not in the scraping logic.
"""
from dataclasses import dataclass

from selenium.webdriver.common.by import By

Locator = tuple[str, str]


@dataclass(frozen=True)
class PageLocators:
    """URLs and element locators for one news site."""

    home_url: str
    consent_button: Locator
    section_link: Locator
    listing_links: tuple[str, ...]
    article_title: Locator
    article_paragraphs: Locator
    cover_image: Locator

    @property
    def listing(self) -> Locator:
        """All listing selectors as one CSS group, so document order is kept."""
        return (By.CSS_SELECTOR, ", ".join(self.listing_links))


ELPAIS = PageLocators(
    home_url="https://elpais.com",
    consent_button=(By.CSS_SELECTOR, "#didomi-notice-agree-button, .didomi-dismiss-button"),
    section_link=(By.PARTIAL_LINK_TEXT, "Opinión"),
    listing_links=(
        ".b-d_a a",
        ".b-d_b.b_op._g._g-md.b_op-1-2 a",
        ".b-d_d.b_col-h.b_st.b_st-r-lg a",
    ),
    article_title=(By.CSS_SELECTOR, "header h1"),
    article_paragraphs=(By.CSS_SELECTOR, "div.a_c.clearfix p"),
    cover_image=(By.CSS_SELECTOR, "span.a_m_w img"),
)
