"""
IBrowserPage / IBrowserSession - Port: the browser the pipeline drives.
The domain doesn't know about nodriver, CDP, or any automation library.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class IBrowserPage(ABC):
    """Port for a single open page. All calls are awaited one at a time."""

    @abstractmethod
    async def goto(self, url: str, timeout: float) -> None:
        """Navigate to url. Raises asyncio.TimeoutError when timeout elapses."""
        pass

    @abstractmethod
    async def wait_until_loaded(self, timeout: float) -> None:
        """Wait for the document to finish loading. Raises asyncio.TimeoutError."""
        pass

    @abstractmethod
    async def has_element(self, selector: str, timeout: Optional[float] = None) -> bool:
        """
        True if a CSS selector matches. With a timeout, keeps waiting for the
        element to appear; without one, checks once.
        """
        pass

    @abstractmethod
    async def click(self, selector: str) -> bool:
        """Click the first match. Returns False if nothing matched."""
        pass

    @abstractmethod
    async def type_text(self, selector: str, text: str, per_char_delay: float = 0.0) -> bool:
        """Type text into the first match one character at a time."""
        pass

    @abstractmethod
    async def press_key(self, key: str) -> None:
        """Press a named key on the focused element ("Enter", "ArrowDown")."""
        pass

    @abstractmethod
    async def evaluate(self, script: str) -> Any:
        """Run a JS expression in the page and return its JSON-able value."""
        pass

    @abstractmethod
    async def content(self) -> str:
        """Return the current rendered HTML."""
        pass

    @abstractmethod
    async def screenshot(self) -> bytes:
        """Full-page PNG capture."""
        pass


class IBrowserSession(ABC):
    """
    Port for the browser lifetime. Used as an async context manager:
    the page is opened on enter and the browser is closed on every exit path.
    """

    @abstractmethod
    async def open(self) -> IBrowserPage:
        pass

    @abstractmethod
    async def close(self) -> None:
        pass

    async def __aenter__(self) -> IBrowserPage:
        try:
            return await self.open()
        except BaseException:
            await self.close()
            raise

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        await self.close()
        return False
