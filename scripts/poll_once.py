#!/usr/bin/env python3
"""
Manual poll of one or more creators.

Builds the service components from the environment, runs a single poll per
creator and prints the resulting monitor records. Useful for checking
credentials and the webhook without starting the HTTP service.

Usage:
    python scripts/poll_once.py sevadus
    python scripts/poll_once.py sevadus darkostoafk --profile
    python scripts/poll_once.py --all
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from alerts_api.services import build_services
from logging_module import LoggingConfig, setup_logging
from shared.errors import NotFoundError
from stream_monitor.tasks import CronTask

logger = logging.getLogger(__name__)


async def poll_creators(creators, load_profile: bool) -> int:
    """Poll each creator once.

    Args:
        creators: Creator logins to poll
        load_profile: Fetch the creator profile before polling

    Returns:
        Process exit code
    """
    services = build_services()
    exit_code = 0
    try:
        for creator in creators:
            if load_profile:
                try:
                    await services.registry.load(creator)
                except NotFoundError as e:
                    logger.error(f"{creator}: {e}")
                    exit_code = 1
                    continue

            task = CronTask.for_creator(creator, services.monitor_config.poll_cron)
            outcome = await services.registry.poll(task)
            record = await services.registry.get_state(creator)
            logger.info(f"{creator}: {outcome}")
            print(json.dumps(record.model_dump(mode="json"), indent=2))

            if outcome in ("error", "rejected"):
                exit_code = 1
    finally:
        await services.aclose()

    return exit_code


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Poll creators once and print their state")
    parser.add_argument("creators", nargs="*", help="Creator logins to poll")
    parser.add_argument("--all", action="store_true", help="Poll every allowed creator")
    parser.add_argument(
        "--profile", action="store_true", help="Load creator profiles before polling"
    )
    args = parser.parse_args()

    setup_logging(LoggingConfig.from_env())

    creators = list(args.creators)
    if args.all:
        from stream_monitor.config import MonitorConfig

        creators = MonitorConfig.from_env().allowed_creators

    if not creators:
        parser.error("name at least one creator or pass --all")

    sys.exit(asyncio.run(poll_creators(creators, args.profile)))


if __name__ == "__main__":
    main()
