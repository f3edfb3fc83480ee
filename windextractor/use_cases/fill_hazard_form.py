"""
FillHazardFormUseCase - drives the left-panel search form.

  1. Address  : mandatory. No address box means nothing downstream can work,
                 so its absence raises AddressControlNotFoundError.
  2. Search   : SEARCH control first, Enter key as fallback.
  3. Risk cat.: direct <select> assignment + change event, with keyboard
                 navigation as the fallback.
  4. Hazard   : tick the Wind checkbox directly + change event.

Steps 2-4 are best-effort: a missing control is a warning, not a failure.
Each step is followed by a bounded settle delay.
"""

import asyncio
import logging
import re

from ..domain.entities.step_outcome import StepOutcome
from ..domain.exceptions import AddressControlNotFoundError
from ..domain.interfaces.i_browser_page import IBrowserPage
from ..infrastructure.config import PipelineSettings

logger = logging.getLogger(__name__)

ADDRESS_INPUT_SELECTOR = "#geocoder_input"
SEARCH_BUTTON_SELECTOR = "div.search-button, .search-button"
RISK_CATEGORY_SELECTOR = "#risk-level-selector"

# Option value '2' is Risk Category II on the current page.
RISK_CATEGORY_VALUE = "2"
RISK_CATEGORY_LABEL = re.compile(r"\bII\b")

KEY_PAUSE_SECONDS = 0.1

CLICK_SEARCH_BY_TEXT_JS = """
(() => {
    const elements = document.querySelectorAll('div, button, span');
    for (const el of elements) {
        if (el.textContent.trim() === 'SEARCH' && el.offsetParent !== null) {
            el.click();
            return true;
        }
    }
    return false;
})()
"""

SET_RISK_CATEGORY_JS = """
(() => {
    const select = document.getElementById('risk-level-selector');
    if (!select) return null;
    select.value = '%s';
    select.dispatchEvent(new Event('change', { bubbles: true }));
    const option = select.options[select.selectedIndex];
    return option ? option.text : '';
})()
""" % RISK_CATEGORY_VALUE

READ_RISK_CATEGORY_JS = """
(() => {
    const select = document.getElementById('risk-level-selector');
    if (!select) return null;
    const option = select.options[select.selectedIndex];
    return option ? option.text : '';
})()
"""

SELECT_WIND_HAZARD_JS = """
(() => {
    let label = null;
    for (const l of document.querySelectorAll('label')) {
        if (l.textContent.includes('Wind')) { label = l; break; }
    }
    let input = label ? (label.control || label.querySelector('input[type="checkbox"]')) : null;
    if (!input) {
        for (const i of document.querySelectorAll('input[type="checkbox"]')) {
            if (i.value === 'wind' || /wind/i.test(i.id || '')) { input = i; break; }
        }
    }
    if (input) {
        if (!input.checked) {
            input.checked = true;
            input.dispatchEvent(new Event('change', { bubbles: true }));
        }
        return 'checkbox';
    }
    if (label) {
        label.click();
        return 'label';
    }
    return null;
})()
"""


class FillHazardFormUseCase:
    """Each public method is one logical form step; the pipeline driver calls them in order."""

    def __init__(self, settings: PipelineSettings):
        self.settings = settings

    async def enter_address(self, page: IBrowserPage, address: str) -> StepOutcome:
        logger.info("[Form] Looking for address input...")
        found = await page.has_element(ADDRESS_INPUT_SELECTOR, timeout=self.settings.element_timeout)
        if not found:
            raise AddressControlNotFoundError(ADDRESS_INPUT_SELECTOR)

        await page.click(ADDRESS_INPUT_SELECTOR)
        await asyncio.sleep(self.settings.short_delay)
        await page.type_text(ADDRESS_INPUT_SELECTOR, address, per_char_delay=self.settings.typing_delay)
        logger.info(f"[Form] Address entered: {address!r}")
        await asyncio.sleep(self.settings.medium_delay)
        return StepOutcome.ok("enter_address", detail=address)

    async def submit_search(self, page: IBrowserPage) -> StepOutcome:
        logger.info("[Form] Clicking SEARCH...")
        if await page.click(SEARCH_BUTTON_SELECTOR):
            method = "search-button"
        elif await page.evaluate(CLICK_SEARCH_BY_TEXT_JS):
            method = "search-text"
        else:
            logger.warning("[Form] SEARCH control not found, pressing Enter instead")
            await page.press_key("Enter")
            method = "enter-key"
        logger.info(f"[Form] Search submitted ({method})")

        # Geocoding + map zoom take a while before the options unlock
        await asyncio.sleep(self.settings.long_delay * 2)
        return StepOutcome.ok("submit_search", detail=method, actions=[method])

    async def select_risk_category(self, page: IBrowserPage) -> StepOutcome:
        logger.info("[Form] Selecting Risk Category II...")
        label = await page.evaluate(SET_RISK_CATEGORY_JS)
        if label is None:
            logger.warning("[Form] Risk category dropdown not found, continuing")
            await asyncio.sleep(self.settings.medium_delay)
            return StepOutcome.missed("select_risk_category", detail="dropdown not found")

        method = "direct-assignment"
        if not RISK_CATEGORY_LABEL.search(label or ""):
            logger.warning(
                f"[Form] Direct assignment not accepted (selected={label!r}), trying keyboard navigation"
            )
            label = await self._select_risk_category_by_keyboard(page)
            method = "keyboard"

        await asyncio.sleep(self.settings.medium_delay)
        if RISK_CATEGORY_LABEL.search(label or ""):
            logger.info(f"[Form] Risk Category selected: {label!r} ({method})")
            return StepOutcome.ok("select_risk_category", detail=label, actions=[method])

        logger.warning(f"[Form] Risk Category II could not be confirmed (selected={label!r})")
        return StepOutcome.missed("select_risk_category", detail=f"selected {label!r}")

    async def _select_risk_category_by_keyboard(self, page: IBrowserPage):
        await page.click(RISK_CATEGORY_SELECTOR)
        await asyncio.sleep(self.settings.short_delay)
        # Options are listed I, II, ... so two steps down lands on II
        for key in ("ArrowDown", "ArrowDown", "Enter"):
            await page.press_key(key)
            await asyncio.sleep(min(KEY_PAUSE_SECONDS, self.settings.short_delay))
        return await page.evaluate(READ_RISK_CATEGORY_JS)

    async def select_hazard_type(self, page: IBrowserPage) -> StepOutcome:
        logger.info("[Form] Selecting Wind hazard...")
        how = await page.evaluate(SELECT_WIND_HAZARD_JS)
        await asyncio.sleep(self.settings.medium_delay)
        if not how:
            logger.warning("[Form] Wind checkbox not found, continuing")
            return StepOutcome.missed("select_hazard_type", detail="wind checkbox not found")

        logger.info(f"[Form] Wind selected (via {how})")
        return StepOutcome.ok("select_hazard_type", detail=how, actions=[how])
