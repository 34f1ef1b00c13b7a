#!/usr/bin/env python3
"""
Seed the event catalog with sample events

Runs against the store backend selected by STORE_BACKEND and does nothing
when the catalog already holds events.

Usage:
    ENV=development python scripts/seed_events.py
"""

import asyncio
import sys
from pathlib import Path

# Add project root to Python path
sys.path.append(str(Path(__file__).parent.parent))

from core.config_manager import ConfigManager
from core.logger import setup_service_logger
from microservices.campus_app import CampusSportsApp
from microservices.sports_event_service.seed_data import seed_sample_events


async def main() -> int:
    config = ConfigManager("event_seeder")
    logger = setup_service_logger("event_seeder", config.settings.logging)

    async with CampusSportsApp(config) as app:
        created = await seed_sample_events(app.events)

    if created:
        logger.info(f"Successfully seeded {len(created)} events")
    else:
        logger.info("Events already seeded")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
