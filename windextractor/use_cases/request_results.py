"""
RequestResultsUseCase - presses VIEW RESULTS and waits for the result panel.

The button sits at the bottom of the scrollable left panel and only becomes
active once a risk category and a load type are chosen. After the click the
panel shows "Retrieving Data..." for a few seconds.
"""

import asyncio
import logging

from ..domain.entities.step_outcome import StepOutcome
from ..domain.interfaces.i_browser_page import IBrowserPage
from ..infrastructure.config import PipelineSettings

logger = logging.getLogger(__name__)

STEP_NAME = "request_results"
VIEW_RESULTS_SELECTOR = ".view-results, button.view-results"

SCROLL_PANEL_BOTTOM_JS = """
(() => {
    const panel = document.getElementById('leftPanel');
    if (panel) { panel.scrollTop = panel.scrollHeight; return true; }
    return false;
})()
"""

SCROLL_PANEL_TOP_JS = """
(() => {
    const panel = document.getElementById('leftPanel');
    if (panel) { panel.scrollTop = 0; return true; }
    return false;
})()
"""

CLICK_RESULTS_BY_CONTAINER_JS = """
(() => {
    const container = document.getElementById('resultsButton');
    if (!container) return false;
    const btn = container.querySelector('a');
    if (!btn) return false;
    btn.click();
    return true;
})()
"""

CLICK_RESULTS_BY_TEXT_JS = """
(() => {
    for (const el of document.querySelectorAll('button, a, div, span')) {
        const text = el.textContent.trim().toUpperCase();
        if ((text === 'VIEW RESULTS' || text === 'VIEW RESULT') && el.offsetParent !== null) {
            el.click();
            return true;
        }
    }
    return false;
})()
"""

RESULTS_WAIT_MULTIPLIER = 3


class RequestResultsUseCase:
    def __init__(self, settings: PipelineSettings):
        self.settings = settings

    async def execute(self, page: IBrowserPage) -> StepOutcome:
        logger.info("[Results] Clicking VIEW RESULTS...")
        await page.evaluate(SCROLL_PANEL_BOTTOM_JS)
        await asyncio.sleep(self.settings.short_delay)

        method = await self._click_view_results(page)
        if method is None:
            logger.warning("[Results] VIEW RESULTS button not found, continuing")
            outcome = StepOutcome.missed(STEP_NAME, detail="view results button not found")
        else:
            logger.info(f"[Results] VIEW RESULTS clicked ({method})")
            outcome = StepOutcome.ok(STEP_NAME, detail=method, actions=[method])

        await asyncio.sleep(self.settings.long_delay * RESULTS_WAIT_MULTIPLIER)

        # Results render at the top of the same panel
        await page.evaluate(SCROLL_PANEL_TOP_JS)
        await asyncio.sleep(self.settings.short_delay)
        return outcome

    @staticmethod
    async def _click_view_results(page: IBrowserPage):
        if await page.evaluate(CLICK_RESULTS_BY_CONTAINER_JS):
            return "by-id-container"
        if await page.evaluate(CLICK_RESULTS_BY_TEXT_JS):
            return "by-text"
        if await page.click(VIEW_RESULTS_SELECTOR):
            return "by-selector"
        return None
