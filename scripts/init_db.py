#!/usr/bin/env python3
"""Create the companies tables directly (without Alembic)."""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import structlog

from src.database import dispose_engine, get_engine
from src.log_config import configure_logging
from src.models import Base

logger = structlog.get_logger()


async def init_db(drop: bool = False):
    """Create all tables."""
    async with get_engine().begin() as conn:
        if drop:
            await conn.run_sync(Base.metadata.drop_all)
            logger.info("tables_dropped")
        await conn.run_sync(Base.metadata.create_all)
    logger.info("tables_created", tables=sorted(Base.metadata.tables))
    await dispose_engine()


if __name__ == "__main__":
    configure_logging()
    asyncio.run(init_db(drop="--drop" in sys.argv[1:]))
