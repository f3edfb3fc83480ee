"""
NoDriverSession / NoDriverPage - Implements IBrowserSession / IBrowserPage.
nodriver is a modern asynchronous undetectable browser automation framework.

Requires: pip install nodriver (and a local Chrome/Chromium).
The session owns exactly one browser and one tab; close() stops the browser
and is safe to call more than once.
"""

import asyncio
import base64
import logging
import os
from typing import Any, Optional

import nodriver as uc

from ..domain.interfaces.i_browser_page import IBrowserPage, IBrowserSession
from ..infrastructure.config import PipelineSettings

logger = logging.getLogger(__name__)

BROWSER_ARGS = [
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-features=IsolateOrigins,site-per-process",
]

READY_POLL_SECONDS = 0.25

# name → (windows virtual key code, text emitted by the key)
_KEYS = {
    "Enter": (13, "\r"),
    "ArrowDown": (40, None),
    "ArrowUp": (38, None),
    "Tab": (9, None),
    "Escape": (27, None),
}


class NoDriverPage(IBrowserPage):
    """Thin async wrapper over a nodriver Tab."""

    def __init__(self, tab, settings: PipelineSettings):
        self.tab = tab
        self.settings = settings

    async def goto(self, url: str, timeout: float) -> None:
        await asyncio.wait_for(self.tab.get(url), timeout=timeout)

    async def wait_until_loaded(self, timeout: float) -> None:
        """Poll document.readyState; nodriver has no network-idle wait of its own."""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while True:
            state = await self.tab.evaluate("document.readyState", return_by_value=True)
            if state == "complete":
                return
            if loop.time() >= deadline:
                raise asyncio.TimeoutError(f"Page did not finish loading within {timeout}s (state={state!r})")
            await asyncio.sleep(READY_POLL_SECONDS)

    async def _query(self, selector: str, timeout: Optional[float] = None):
        if timeout:
            try:
                return await self.tab.select(selector, timeout=timeout)
            except asyncio.TimeoutError:
                return None
        return await self.tab.query_selector(selector)

    async def has_element(self, selector: str, timeout: Optional[float] = None) -> bool:
        return await self._query(selector, timeout) is not None

    async def click(self, selector: str) -> bool:
        element = await self._query(selector)
        if element is None:
            return False
        await asyncio.wait_for(element.click(), timeout=self.settings.action_timeout)
        return True

    async def type_text(self, selector: str, text: str, per_char_delay: float = 0.0) -> bool:
        element = await self._query(selector)
        if element is None:
            return False
        for char in text:
            await element.send_keys(char)
            if per_char_delay:
                await asyncio.sleep(per_char_delay)
        return True

    async def press_key(self, key: str) -> None:
        code, text = _KEYS.get(key, (None, None))
        common = dict(key=key, code=key, windows_virtual_key_code=code, native_virtual_key_code=code)
        await self.tab.send(uc.cdp.input_.dispatch_key_event(type_="keyDown", text=text, **common))
        await self.tab.send(uc.cdp.input_.dispatch_key_event(type_="keyUp", **common))

    async def evaluate(self, script: str) -> Any:
        return await self.tab.evaluate(script, return_by_value=True)

    async def content(self) -> str:
        return await self.tab.get_content()

    async def screenshot(self) -> bytes:
        data = await self.tab.send(
            uc.cdp.page.capture_screenshot(format_="png", capture_beyond_viewport=True)
        )
        return base64.b64decode(data)


class NoDriverSession(IBrowserSession):
    """
    One headless Chrome per invocation.

    Usage:
        async with NoDriverSession(settings) as page:
            await page.goto(...)
    """

    def __init__(self, settings: PipelineSettings):
        self.settings = settings
        self.browser = None
        self.page: Optional[NoDriverPage] = None

    async def open(self) -> NoDriverPage:
        s = self.settings
        logger.info("[Browser] Launching browser...")
        self.browser = await uc.start(
            headless=s.headless,
            sandbox=False,
            browser_args=BROWSER_ARGS,
            browser_executable_path=os.getenv("CHROME_EXECUTABLE_PATH") or None,
        )
        tab = await self.browser.get("about:blank")
        await tab.send(
            uc.cdp.emulation.set_device_metrics_override(
                width=s.viewport_width,
                height=s.viewport_height,
                device_scale_factor=1,
                mobile=False,
            )
        )
        await tab.send(uc.cdp.network.set_user_agent_override(user_agent=s.user_agent))
        logger.info("[Browser] Browser launched")
        self.page = NoDriverPage(tab, s)
        return self.page

    async def close(self) -> None:
        if self.browser is None:
            return
        browser, self.browser = self.browser, None
        try:
            browser.stop()
            logger.info("[Browser] Browser closed")
        except Exception as e:
            logger.warning(f"[Browser] Error while closing browser: {e}")
