# src/reactive_tasks/cli/main.py

"""
Demo entrypoint.

Initializes logging, builds two controllers and drives them from the console:
- a multi controller with one failing and one succeeding producer,
- a single controller over a counter, re-run after the counter changes.
"""

from __future__ import annotations

import asyncio
import logging

from ..config import Settings, get_settings
from ..logging_setup import level_from_name, setup_logging
from ..tasks.multi import MultiTaskController
from ..tasks.single import SingleTaskController
from .console import ConsoleStatePrinter, print_error

logger = logging.getLogger(__name__)

FAILING_KEY = "A"
SUCCEEDING_KEY = "B"


def build_demo_multi(settings: Settings) -> MultiTaskController:
    async def failing() -> str:
        await asyncio.sleep(settings.demo_failing_delay_ms / 1000)
        raise RuntimeError("X failed")

    async def succeeding() -> str:
        await asyncio.sleep(settings.demo_succeeding_delay_ms / 1000)
        return "ok"

    return MultiTaskController({FAILING_KEY: failing, SUCCEEDING_KEY: succeeding}, name="demo-multi")


class Counter:
    def __init__(self, value: int = 5) -> None:
        self.value = value

    async def read(self) -> int:
        await asyncio.sleep(0)
        return self.value


async def run_demo(settings: Settings) -> int:
    multi = build_demo_multi(settings)
    multi.subscribe(ConsoleStatePrinter.for_multi(multi))
    multi.subscribe_errors(print_error)

    counter = Counter()
    single: SingleTaskController[int] = SingleTaskController(counter.read, name="demo-counter")
    single.subscribe(ConsoleStatePrinter.for_single(single))

    await asyncio.gather(multi.run_operations(), single.run_operation())

    counter.value = 10
    single.notify_source_changed()
    await single.run_operation()

    logger.info(
        "Demo finished: %s error=%s, %s data=%s",
        FAILING_KEY,
        multi.has_error(FAILING_KEY),
        SUCCEEDING_KEY,
        multi.data_map[SUCCEEDING_KEY],
    )
    return 0


def main() -> int:
    settings = get_settings()
    setup_logging(
        log_dir=settings.log_dir,
        console_level=level_from_name(settings.log_level),
        log_to_file=settings.log_to_file,
    )

    logger.info("Starting %s...", settings.app_name)
    try:
        return asyncio.run(run_demo(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        return 130
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    raise SystemExit(main())
