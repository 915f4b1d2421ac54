#!/usr/bin/env python3
"""
Seed the default benefit / effort scoring configs into the database.

Usage:
    python -m scripts.seed_scoring_configs
    python -m scripts.seed_scoring_configs --create-schema --log-level DEBUG

Existing config rows are left untouched, so the script can be re-run safely.
"""

from __future__ import annotations

import argparse
import logging
import sys

from app.db.schema_ensure import ensure_schema
from app.db.session import SessionLocal, engine
from app.services.scoring_config_service import ScoringConfigService


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed default scoring configs.")
    parser.add_argument(
        "--create-schema",
        action="store_true",
        help="Create missing tables before seeding.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (e.g. INFO, DEBUG).",
    )
    return parser.parse_args()


def configure_logging(level: str) -> None:
    lvl = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
    )


def main() -> int:
    args = parse_args()
    configure_logging(args.log_level)
    logger = logging.getLogger(__name__)
    logger.info("seed_configs.cli.start")

    if args.create_schema:
        ensure_schema(engine)

    db = SessionLocal()
    try:
        inserted = ScoringConfigService(db).seed_default_configs()
        logger.info("seed_configs.cli.done", extra={"count": inserted})
        print(f"Inserted {inserted} scoring config rows")
        return 0
    except KeyboardInterrupt:
        logger.warning("seed_configs.cli.interrupted")
        return 130
    except Exception:
        db.rollback()
        logger.exception("seed_configs.cli.error")
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
