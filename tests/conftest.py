from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def render_listing(rows: list[tuple[str, str, str]], more_href: str | None = None) -> str:
    """Build a minimal newest-page document in the feed's table layout."""
    parts = ['<html><body><table id="hnmain"><tr><td><table class="itemlist">']
    for identifier, title, age in rows:
        id_attr = f' id="{identifier}"' if identifier else ""
        parts.append(
            f'<tr class="athing submission"{id_attr}>'
            '<td class="title"><span class="rank">1.</span></td>'
            f'<td class="title"><span class="titleline"><a href="https://example.com/{identifier}">{title}</a>'
            ' <span class="sitebit comhead">(<a href="from?site=example.com">example.com</a>)</span>'
            "</span></td></tr>"
            '<tr><td colspan="2"></td><td class="subtext"><span class="subline">'
            '<span class="score">1 point</span> by <a class="hnuser">someone</a> '
            f'<span class="age" title="2026-02-19T00:00:00"><a href="item?id={identifier}">{age}</a></span>'
            "</span></td></tr>"
            '<tr class="spacer" style="height:5px"></tr>'
        )
    if more_href:
        parts.append(
            '<tr class="morespace" style="height:10px"></tr>'
            f'<tr><td colspan="2"></td><td class="title"><a href="{more_href}" class="morelink" rel="next">More</a></td></tr>'
        )
    parts.append("</table></td></tr></table></body></html>")
    return "".join(parts)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR
