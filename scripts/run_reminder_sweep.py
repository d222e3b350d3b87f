"""Run one reminder sweep: fire every unsent reminder whose time has come.

Usage:
    uv run python -m scripts.run_reminder_sweep [--batch-size N]
Intended for cron. Requires DATABASE_URL; Redis is used for workflow
notifications only when REMINDER_FANOUT_WORKFLOWS and REDIS_ENABLED are set.
"""

import argparse
import asyncio
import sys

import app.infrastructure.persistence.database as database
from app.core.config import get_settings
from app.domain.exceptions import SqlNotConfiguredException
from app.infrastructure.services.runtime import DispatchRuntime
from app.shared.telemetry.logging import setup_logging


async def main(batch_size: int | None = None) -> int:
    """Run the sweep and print how many reminders fired."""
    settings = get_settings()
    if batch_size is not None:
        settings = settings.model_copy(update={"reminder_sweep_batch_size": batch_size})
    try:
        session_factory = database.get_session_factory()
    except SqlNotConfiguredException:
        print("DATABASE_URL not configured", file=sys.stderr)
        return 1

    runtime = await DispatchRuntime.start(settings, session_factory)
    try:
        result = await runtime.sweep.run()
    finally:
        await runtime.stop()
        await database.dispose_engine()

    print(f"Done. Reminders fired: {result.processed_count}")
    for reminder_id in result.reminder_ids:
        print(f"  {reminder_id}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--batch-size", type=int, default=None)
    args = parser.parse_args()
    setup_logging()
    sys.exit(asyncio.run(main(args.batch_size)))
