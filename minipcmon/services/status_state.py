from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone

from minipcmon.core.models import Snapshot


@dataclass
class StatusState:
    """Most recent snapshot served, kept for health reporting only."""

    last_snapshot: Snapshot | None = None
    last_query_utc: datetime | None = None
    query_count: int = 0
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    async def record(self, snapshot: Snapshot) -> None:
        async with self.lock:
            self.last_snapshot = snapshot
            self.last_query_utc = datetime.now(timezone.utc)
            self.query_count += 1
