"""Deferred work for the host side.

The host resolves aliases of a freshly written token asynchronously, after
the write call returns. Anything that reads such a token is scheduled for a
later turn instead of running in the same synchronous pass.
"""

from collections import deque
from typing import Callable


class TurnQueue:
    """FIFO of callables to run once the current turn has finished."""

    def __init__(self) -> None:
        self._pending: deque[Callable[[], None]] = deque()

    def schedule(self, fn: Callable[[], None]) -> None:
        self._pending.append(fn)

    def run_pending(self) -> int:
        """Run queued callables, including ones they schedule. Returns how many ran."""
        ran = 0
        while self._pending:
            fn = self._pending.popleft()
            fn()
            ran += 1
        return ran

    def __len__(self) -> int:
        return len(self._pending)
