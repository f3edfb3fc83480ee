"""
Root conftest.py: shared fixtures and helpers for the entire test suite.

Provides:
- PipelineSettings with all delays zeroed
- ExtractionInput / ExtractionResult factory helpers
- FakePage / FakeSession: in-memory stand-ins for the browser port
- Mock result store fixture
"""

from typing import Any, Dict, Iterable, Optional
from unittest.mock import AsyncMock

import pytest

from windextractor.domain.entities.extraction_input import ExtractionInput
from windextractor.domain.entities.extraction_result import ExtractionResult
from windextractor.domain.interfaces.i_browser_page import IBrowserPage, IBrowserSession
from windextractor.infrastructure.config import PipelineSettings
from windextractor.use_cases.fill_hazard_form import (
    ADDRESS_INPUT_SELECTOR,
    SEARCH_BUTTON_SELECTOR,
    SELECT_WIND_HAZARD_JS,
    SET_RISK_CATEGORY_JS,
)
from windextractor.use_cases.request_results import CLICK_RESULTS_BY_CONTAINER_JS

SAMPLE_ADDRESS = "411 Crusaders Drive, Sanford, NC 27330"

RESULTS_HTML = """
<html><body>
  <div id="leftPanel">
    <div class="loads-container">
      <span class="loads-container__main-details">Ultimate Design Wind Speed, Vult 114 Vmph</span>
    </div>
  </div>
</body></html>
"""

EMPTY_RESULTS_HTML = """
<html><body>
  <div id="leftPanel"><p>Retrieving Data...</p></div>
</body></html>
"""


# ─────────────────────────────────────────────────────────────────────────────
# Domain object factories
# ─────────────────────────────────────────────────────────────────────────────


def make_settings(**overrides) -> PipelineSettings:
    """PipelineSettings with every delay at zero so tests never sleep."""
    values = dict(
        url="https://hazard.test/",
        navigation_timeout=1.0,
        element_timeout=0.1,
        action_timeout=0.1,
        short_delay=0.0,
        medium_delay=0.0,
        long_delay=0.0,
        typing_delay=0.0,
    )
    values.update(overrides)
    return PipelineSettings(**values)


def make_input(address: str = SAMPLE_ADDRESS, debug_screenshots: bool = False) -> ExtractionInput:
    return ExtractionInput(address=address, debug_screenshots=debug_screenshots)


def make_result(address: str = SAMPLE_ADDRESS, timestamp: str = "2025-12-19T12:00:00.000Z") -> ExtractionResult:
    return ExtractionResult(address=address, timestamp=timestamp)


# ─────────────────────────────────────────────────────────────────────────────
# Browser fakes
# ─────────────────────────────────────────────────────────────────────────────


class FakePage(IBrowserPage):
    """
    In-memory page. `elements` is the set of selectors that match;
    `scripts` maps a JS snippet to its return value (or a zero-arg callable
    producing it). Unknown snippets evaluate to None.
    """

    def __init__(
        self,
        html: str = "",
        elements: Optional[Iterable[str]] = None,
        scripts: Optional[Dict[str, Any]] = None,
    ):
        self.html = html
        self.elements = set(elements or [])
        self.scripts = dict(scripts or {})
        self.calls = []
        self.clicked = []
        self.typed = {}
        self.keys = []
        self.evaluated = []
        self.goto_error: Optional[BaseException] = None
        self.screenshot_error: Optional[BaseException] = None
        self.screenshots_taken = 0

    async def goto(self, url: str, timeout: float) -> None:
        self.calls.append(("goto", url))
        if self.goto_error:
            raise self.goto_error

    async def wait_until_loaded(self, timeout: float) -> None:
        self.calls.append(("wait_until_loaded", timeout))

    async def has_element(self, selector: str, timeout: Optional[float] = None) -> bool:
        self.calls.append(("has_element", selector))
        return selector in self.elements

    async def click(self, selector: str) -> bool:
        self.calls.append(("click", selector))
        if selector in self.elements:
            self.clicked.append(selector)
            return True
        return False

    async def type_text(self, selector: str, text: str, per_char_delay: float = 0.0) -> bool:
        self.calls.append(("type_text", selector))
        if selector not in self.elements:
            return False
        self.typed[selector] = self.typed.get(selector, "") + text
        return True

    async def press_key(self, key: str) -> None:
        self.calls.append(("press_key", key))
        self.keys.append(key)

    async def evaluate(self, script: str) -> Any:
        self.calls.append(("evaluate", script))
        self.evaluated.append(script)
        value = self.scripts.get(script)
        if isinstance(value, BaseException):
            raise value
        return value() if callable(value) else value

    async def content(self) -> str:
        self.calls.append(("content", None))
        return self.html

    async def screenshot(self) -> bytes:
        self.calls.append(("screenshot", None))
        if self.screenshot_error:
            raise self.screenshot_error
        self.screenshots_taken += 1
        return b"\x89PNG fake"


class FakeSession(IBrowserSession):
    """Counts open/close so tests can check the browser is released exactly once."""

    def __init__(self, page: Optional[FakePage] = None, open_error: Optional[BaseException] = None):
        self.page = page or FakePage()
        self.open_error = open_error
        self.open_count = 0
        self.close_count = 0

    async def open(self) -> FakePage:
        self.open_count += 1
        if self.open_error:
            raise self.open_error
        return self.page

    async def close(self) -> None:
        self.close_count += 1


def make_results_page(html: str = RESULTS_HTML, **script_overrides) -> FakePage:
    """A page where every form control is present and results render."""
    scripts = {
        SET_RISK_CATEGORY_JS: "Risk Category II",
        SELECT_WIND_HAZARD_JS: "checkbox",
        CLICK_RESULTS_BY_CONTAINER_JS: True,
    }
    scripts.update(script_overrides)
    return FakePage(
        html=html,
        elements={ADDRESS_INPUT_SELECTOR, SEARCH_BUTTON_SELECTOR},
        scripts=scripts,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def mock_store():
    """AsyncMock for IResultStore."""
    mock = AsyncMock()
    mock.push_row.return_value = None
    mock.set_value.return_value = None
    mock.get_value.return_value = None
    return mock


@pytest.fixture
def results_page():
    return make_results_page()
