"""Trailing-edge debouncing on the asyncio event loop."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any


class Debouncer:
    """Run a callback once after a burst of calls has gone quiet.

    Every :meth:`schedule` cancels the pending call and re-arms the timer on
    the running event loop. Outside a running loop the call stays pending
    until :meth:`flush`.
    """

    def __init__(self, delay: float, callback: Callable[[], Any]) -> None:
        self.delay = delay
        self.callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    def schedule(self) -> None:
        self.cancel()
        self._pending = True
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._pending = False

    def flush(self) -> bool:
        """Run the pending call now.

        Returns:
            True when a pending call was run
        """
        if not self._pending:
            return False
        self.cancel()
        self.callback()
        return True

    def _fire(self) -> None:
        self._handle = None
        self._pending = False
        self.callback()
