"""
DismissObstructionsUseCase - clears overlays that block the search form.

The hazard tool greets first-time visitors with a cookie banner and a
"Welcome" popup. Both sit on top of the left panel. Each probe below only
fires on a VISIBLE target, so running the dismisser twice is harmless and
the second run reports nothing.

Never fails the pipeline: probe errors are logged and skipped.
"""

import asyncio
import json
import logging
from typing import List

from ..domain.entities.step_outcome import StepOutcome
from ..domain.interfaces.i_browser_page import IBrowserPage
from ..infrastructure.config import PipelineSettings

logger = logging.getLogger(__name__)

STEP_NAME = "dismiss_obstructions"

DISMISS_COOKIE_BANNER_JS = """
(() => {
    const btn = document.querySelector('button.cc-btn.cc-dismiss');
    if (btn && btn.offsetParent !== null) {
        btn.click();
        return true;
    }
    return false;
})()
"""

# The close icon is tiny and not keyboard-accessible, so hide the popup instead.
HIDE_WELCOME_POPUP_JS = """
(() => {
    const popup = document.getElementById('welcomePopup');
    if (popup) {
        if (popup.offsetParent === null || getComputedStyle(popup).display === 'none') {
            return null;
        }
        popup.style.display = 'none';
        return 'hidden via style';
    }
    const byClass = document.querySelector('.details-popup');
    if (byClass && byClass.offsetParent !== null) {
        byClass.remove();
        return 'removed from DOM';
    }
    return null;
})()
"""

LEGACY_CLOSE_SELECTORS = [
    "div.modal-header span",
    "i.close-modal",
    ".close-modal",
    'button[aria-label="Close"]',
    ".modal-close",
    ".close-button",
]


def click_visible_js(selector: str) -> str:
    """JS that clicks the first match of selector only if it is visible."""
    return f"""
(() => {{
    const el = document.querySelector({json.dumps(selector)});
    if (el && el.offsetParent !== null) {{
        el.click();
        return true;
    }}
    return false;
}})()
"""


class DismissObstructionsUseCase:
    """
    Tries each known dismissal action in order and records which fired.
    The legacy close controls are alternatives to each other, so at most
    one of them is clicked per run.
    """

    def __init__(self, settings: PipelineSettings):
        self.settings = settings

    async def execute(self, page: IBrowserPage) -> StepOutcome:
        logger.info("[Dismiss] Checking for modals/banners to dismiss...")
        actions: List[str] = []

        if await self._run_probe(page, "cookie-banner", DISMISS_COOKIE_BANNER_JS):
            actions.append("cookie-banner")
            logger.info("[Dismiss] Dismissed cookie banner")
            await asyncio.sleep(self.settings.short_delay)

        how = await self._run_probe(page, "welcome-popup", HIDE_WELCOME_POPUP_JS)
        if how:
            actions.append("welcome-popup")
            logger.info(f"[Dismiss] Dismissed Welcome modal ({how})")
            await asyncio.sleep(self.settings.short_delay)

        for selector in LEGACY_CLOSE_SELECTORS:
            if await self._run_probe(page, selector, click_visible_js(selector)):
                actions.append(f"close:{selector}")
                logger.info(f"[Dismiss] Dismissed modal using: {selector}")
                await asyncio.sleep(self.settings.short_delay)
                break

        if not actions:
            logger.info("[Dismiss] No modal found to dismiss")
            return StepOutcome(step=STEP_NAME, attempted=True, succeeded=True, detail="nothing to dismiss")

        return StepOutcome.ok(STEP_NAME, detail=", ".join(actions), actions=actions)

    @staticmethod
    async def _run_probe(page: IBrowserPage, name: str, script: str):
        try:
            return await page.evaluate(script)
        except Exception as e:
            logger.debug(f"[Dismiss] Probe {name} failed: {e}")
            return None
