"""Per-call context threaded through the resolver into every collaborator."""

from __future__ import annotations

import asyncio
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass


@dataclass(frozen=True)
class ResolveContext:
    """Carries an optional absolute deadline in event-loop time.

    Cancellation needs no field here: it travels with the asyncio task.
    """

    deadline: float | None = None

    @classmethod
    def with_timeout(cls, seconds: float) -> ResolveContext:
        return cls(deadline=asyncio.get_running_loop().time() + seconds)

    def bounded(self) -> AbstractAsyncContextManager[asyncio.Timeout]:
        """Bound an awaited block by the deadline; raises TimeoutError on expiry."""
        return asyncio.timeout_at(self.deadline)


BACKGROUND = ResolveContext()
