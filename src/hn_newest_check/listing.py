from __future__ import annotations

import re
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from hn_newest_check.models import RawRecord

ROW_SELECTOR = "tr.athing"
TITLE_SELECTOR = "span.titleline > a"
AGE_SELECTOR = "span.age"
MORE_LINK_SELECTOR = "a.morelink"


def _clean_spaces(value: str) -> str:
    return re.sub(r"\s+", " ", value).strip()


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _age_text(row) -> str:
    subtext_row = row.find_next_sibling("tr")
    if subtext_row is None:
        return ""
    age = subtext_row.select_one(AGE_SELECTOR)
    if age is None:
        return ""
    return _clean_spaces(age.get_text(" ", strip=True))


def parse_listing(html: str) -> list[RawRecord]:
    soup = _soup(html)
    records: list[RawRecord] = []

    for row in soup.select(ROW_SELECTOR):
        anchor = row.select_one(TITLE_SELECTOR)
        title = _clean_spaces(anchor.get_text(" ", strip=True)) if anchor is not None else ""
        records.append(
            RawRecord(
                identifier=(row.get("id") or "").strip(),
                title=title,
                age_text=_age_text(row),
            )
        )

    return records


def count_rows(html: str) -> int:
    return len(_soup(html).select(ROW_SELECTOR))


def find_more_link(html: str, base_url: str) -> str | None:
    anchor = _soup(html).select_one(MORE_LINK_SELECTOR)
    if anchor is None:
        return None
    href = (anchor.get("href") or "").strip()
    if not href:
        return None
    return urljoin(base_url, href)
