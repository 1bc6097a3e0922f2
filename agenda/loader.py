"""Pull announcements and vehicle logs side by side."""
from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional

from sheets.schemas import SourceResult

logger = logging.getLogger(__name__)

# Thread pool for running the blocking requests calls in async context
executor = ThreadPoolExecutor(max_workers=4)


@dataclass
class CalendarSources:
    announcements: SourceResult
    vehicle_logs: SourceResult

    @property
    def errors(self) -> dict[str, str]:
        return {
            source.name: source.error
            for source in (self.announcements, self.vehicle_logs)
            if source.error
        }


async def _pull(name: str, fetch: Callable[[], SourceResult], pool: ThreadPoolExecutor) -> SourceResult:
    loop = asyncio.get_running_loop()
    try:
        result = await loop.run_in_executor(pool, fetch)
    except Exception as exc:
        logger.warning("Loading %s failed: %s", name, exc)
        return SourceResult(name=name, error=str(exc) or exc.__class__.__name__)
    if result.error:
        logger.warning("Loading %s failed: %s", name, result.error)
    else:
        logger.info("Loaded %d %s", len(result.records), name)
    return result


async def load_calendar_sources(client, pool: Optional[ThreadPoolExecutor] = None) -> CalendarSources:
    """Fetch both record lists concurrently.

    A failing source comes back empty with its error set; the other one is
    kept as loaded.
    """
    pool = pool or executor
    announcements, vehicle_logs = await asyncio.gather(
        _pull("announcements", client.get_announcements, pool),
        _pull("vehicle_logs", client.get_vehicle_logs, pool),
    )
    return CalendarSources(announcements=announcements, vehicle_logs=vehicle_logs)
