"""Run the report scheduler without the HTTP API.

Usage:
    PYTHONPATH=src python scripts/run_worker.py          # poll forever
    PYTHONPATH=src python scripts/run_worker.py --once   # single cycle, then exit

Expects the report_requests table to exist (run ``alembic upgrade head`` first).
"""

import argparse
import asyncio
import logging

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logger = logging.getLogger("run_worker")
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


async def main(once: bool) -> None:
    from ledgerreports.container import Container

    container = Container()
    scheduler = container.report_scheduler()
    try:
        if once:
            await scheduler.tick()
            return
        scheduler.start()
        await asyncio.Event().wait()
    finally:
        await scheduler.stop()
        await container.engine().dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--once", action="store_true", help="run a single cycle and exit")
    args = parser.parse_args()
    try:
        asyncio.run(main(args.once))
    except KeyboardInterrupt:
        logger.info("Interrupted")
