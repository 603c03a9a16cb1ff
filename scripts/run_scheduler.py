"""
Standalone SMS scheduler - runs the notification poller without the API

Uses the same storage settings as the app (.env):
    python scripts/run_scheduler.py            # loop forever
    python scripts/run_scheduler.py --once     # one pass, ignoring the send hour
"""

import asyncio
import sys
from pathlib import Path
from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables
load_dotenv()

from wishlink.core.config import settings, validate_settings
from wishlink.core.context import build_context
from wishlink.core.logging import setup_logging, get_logger

setup_logging()
logger = get_logger("scheduler")


async def main(run_once: bool = False):
    validate_settings()
    context = build_context(settings)

    try:
        if run_once:
            sent = context.poller.check_and_send(enforce_send_hour=False)
            logger.info(f"✅ Manual pass done, {len(sent)} SMS sent")
            return

        context.poller.pending_report()
        await context.poller.run_forever()
    finally:
        context.store.close()


if __name__ == "__main__":
    try:
        asyncio.run(main(run_once="--once" in sys.argv[1:]))
    except KeyboardInterrupt:
        logger.info("🛑 Scheduler stopped")
