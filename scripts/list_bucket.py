#!/usr/bin/env python3
"""
List a prefix of the configured chunk bucket

Usage:
    uv run python scripts/list_bucket.py [prefix] [delimiter]
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config.settings import get_settings
from core.metrics import get_obs_request_duration
from factory.client_factory import create_storage_client

logging.basicConfig(
    level=get_settings().LOG_LEVEL, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def main(prefix: str = "", delimiter: str = ""):
    """Main entry point"""
    client = create_storage_client()
    await client.connect()

    try:
        objects, common_prefixes = await client.list_objects(prefix, delimiter)
    finally:
        await client.stop()

    for common_prefix in common_prefixes:
        logger.info(f"  [dir] {common_prefix}")
    for obj in objects:
        logger.info(f"  {obj.modified_at.isoformat()}  {obj.key}")

    logger.info(f"✓ {len(objects)} objects, {len(common_prefixes)} common prefixes under '{prefix}'")

    hist = get_obs_request_duration()
    for operation, status_code in hist.labels():
        series = hist.series(operation, status_code)
        logger.info(f"  {operation} [{status_code}]: {series.count} requests, {series.sum:.3f}s total")


if __name__ == "__main__":
    asyncio.run(main(*sys.argv[1:3]))
