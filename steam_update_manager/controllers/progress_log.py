"""Shared progress log for update passes.

Every per-title task appends its outcome here. Appends are serialized so
lines never interleave, and each line is forwarded to listeners (the
presentation layer's log view) as soon as it is written.
"""

import asyncio
import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

LogListener = Callable[[str], None]


class ProgressLog:
    """Append-only, lock-guarded text log."""

    def __init__(self, listener: Optional[LogListener] = None):
        self._lines: List[str] = []
        self._listeners: List[LogListener] = []
        if listener is not None:
            self._listeners.append(listener)

        # Serializes appends from concurrent update tasks
        self._lock = asyncio.Lock()

    def add_listener(self, listener: LogListener) -> None:
        self._listeners.append(listener)

    async def append(self, line: str) -> None:
        async with self._lock:
            self._lines.append(line)
            logger.info(f"[ProgressLog] {line}")
            for listener in self._listeners:
                try:
                    listener(line)
                except Exception as e:
                    logger.error(f"[ProgressLog] Listener failed: {e}")

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    @property
    def text(self) -> str:
        return "".join(f"{line}\n" for line in self._lines)

    def __len__(self) -> int:
        return len(self._lines)
