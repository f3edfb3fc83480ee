"""
ExtractWindSpeedUseCase - recovers the wind speed from the rendered results.

Architecture: the browser is only asked for the rendered HTML, once.
All parsing is done in Python with BeautifulSoup, as an ordered list of
independent strategies. The first strategy that yields a value wins:

  1. result-panel: the dedicated result element (.loads-container__main-details)
  2. page-text   : same pattern over the whole body text
  3. label-scan  : a bare number shortly after the "Wind Speed" label

No match is not an exception: the caller records a failed result.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional

from bs4 import BeautifulSoup

from ..domain.interfaces.i_browser_page import IBrowserPage

logger = logging.getLogger(__name__)

RESULT_PANEL_SELECTOR = ".loads-container__main-details"
WIND_SPEED_LABEL = "Wind Speed"
LABEL_SCAN_WINDOW = 120

# 2-3 digits (never part of a longer number), optional space, then the unit.
WIND_SPEED_PATTERN = re.compile(r"(?<!\d)(\d{2,3})\s*(Vmph|mph)(?![a-z])", re.IGNORECASE)
BARE_NUMBER_PATTERN = re.compile(r"(?<!\d)(\d{2,3})(?!\d)")

EXTRACTION_FAILED_ERROR = "Could not extract wind speed value from results page"


@dataclass(frozen=True)
class WindSpeedMatch:
    value: str
    strategy: str
    unit_token: Optional[str] = None


@dataclass(frozen=True)
class ExtractionStrategy:
    name: str
    apply: Callable[[BeautifulSoup], Optional[WindSpeedMatch]]


def match_wind_speed(text: str) -> Optional[re.Match]:
    """Apply the numeric-plus-unit pattern. Returns the regex match or None."""
    if not text:
        return None
    return WIND_SPEED_PATTERN.search(text)


def _visible_text(node) -> str:
    return node.get_text(separator=" ", strip=True) if node is not None else ""


def _from_result_panel(soup: BeautifulSoup) -> Optional[WindSpeedMatch]:
    panel = soup.select_one(RESULT_PANEL_SELECTOR)
    m = match_wind_speed(_visible_text(panel))
    if m:
        return WindSpeedMatch(value=m.group(1), strategy="result-panel", unit_token=m.group(2))
    return None


def _from_page_text(soup: BeautifulSoup) -> Optional[WindSpeedMatch]:
    m = match_wind_speed(_visible_text(soup.body or soup))
    if m:
        return WindSpeedMatch(value=m.group(1), strategy="page-text", unit_token=m.group(2))
    return None


def _from_label_scan(soup: BeautifulSoup) -> Optional[WindSpeedMatch]:
    text = _visible_text(soup.body or soup)
    idx = text.find(WIND_SPEED_LABEL)
    if idx < 0:
        return None
    start = idx + len(WIND_SPEED_LABEL)
    window = text[start : start + LABEL_SCAN_WINDOW]
    m = BARE_NUMBER_PATTERN.search(window)
    if m:
        return WindSpeedMatch(value=m.group(1), strategy="label-scan")
    return None


DEFAULT_STRATEGIES: List[ExtractionStrategy] = [
    ExtractionStrategy("result-panel", _from_result_panel),
    ExtractionStrategy("page-text", _from_page_text),
    ExtractionStrategy("label-scan", _from_label_scan),
]


def parse_html(html: str) -> BeautifulSoup:
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup(["script", "style", "noscript", "template"]):
        tag.decompose()
    return soup


def extract_from_html(
    html: str, strategies: Optional[List[ExtractionStrategy]] = None
) -> Optional[WindSpeedMatch]:
    """Run the strategies in order over one HTML snapshot; first match wins."""
    soup = parse_html(html)
    for strategy in strategies or DEFAULT_STRATEGIES:
        match = strategy.apply(soup)
        if match:
            return match
        logger.debug(f"[Extract] Strategy {strategy.name} found nothing")
    return None


class ExtractWindSpeedUseCase:
    def __init__(self, strategies: Optional[List[ExtractionStrategy]] = None):
        self.strategies = strategies or DEFAULT_STRATEGIES

    async def execute(self, page: IBrowserPage) -> Optional[WindSpeedMatch]:
        logger.info("[Extract] Extracting wind speed value...")
        html = await page.content()
        match = extract_from_html(html, self.strategies)

        if match:
            logger.info(f"[Extract] Extracted wind speed: {match.value} mph (via {match.strategy})")
        else:
            sample = _visible_text(parse_html(html).body)[:300]
            logger.warning(f"[Extract] Wind speed not found. Page sample: {sample!r}")
        return match
