#!/usr/bin/env python3
"""
Kanban Board Backend Server Runner

Usage:
  python run.py                    # Development mode
  python run.py --production       # Production mode
  python run.py --skip-db-check    # Start without pinging the database
"""
import uvicorn
import sys
import os
import asyncio
import argparse
import logging
from pathlib import Path

from sqlalchemy import text

logger = logging.getLogger("run")


async def check_database_connection():
    """Check database connection"""
    from app.core.database import get_db, close_db

    try:
        async for db in get_db():
            await db.execute(text("SELECT 1"))
            logger.info("Database connection verified")
            break
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False
    finally:
        await close_db()


def get_server_config(production=False):
    """Get server configuration"""
    config = {
        "app": "app.main:app",
        "host": os.getenv("HOST", "0.0.0.0"),
        "port": int(os.getenv("PORT", "8000")),
        "log_level": "info"
    }

    if production:
        # Board channels live in process memory; one worker only
        config.update({
            "workers": 1,
            "access_log": True,
            "use_colors": False,
            "reload": False
        })
    else:
        config.update({
            "reload": True,
            "reload_dirs": ["app"],
            "reload_includes": ["*.py"],
            "reload_excludes": ["*.pyc", "__pycache__"]
        })

    return config


def main():
    """Main server entry point"""
    parser = argparse.ArgumentParser(description='Kanban Board Backend Server')
    parser.add_argument('--production', action='store_true', help='Run in production mode')
    parser.add_argument('--skip-db-check', action='store_true', help='Skip database connection check')

    args = parser.parse_args()

    # Ensure we're in the right directory
    os.chdir(Path(__file__).parent)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    mode = "production" if args.production else "development"
    logger.info(f"Starting Kanban Board API in {mode} mode")

    if not args.skip_db_check:
        if not asyncio.run(check_database_connection()):
            sys.exit(1)

    try:
        uvicorn.run(**get_server_config(args.production))
    except KeyboardInterrupt:
        logger.info("Server stopped by user")


if __name__ == "__main__":
    main()
