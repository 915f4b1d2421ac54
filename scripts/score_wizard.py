#!/usr/bin/env python3
"""
Score a wizard JSON document and print the benefit / effort / risk results.

Usage:
    python -m scripts.score_wizard path/to/wizard.json
    python -m scripts.score_wizard wizard.json --kind benefit --factors
    cat wizard.json | python -m scripts.score_wizard -

Flags:
    --kind NAME       Only compute one score (benefit, effort, risk). Omit for all three.
    --factors         Include the per-factor breakdown in the output.
    --use-db-configs  Read active configs from DATABASE_URL instead of the built-in defaults.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict

from app.schemas.wizard import WizardInput
from app.services.scoring import ScoreKind, ScoreResult
from app.services.scoring_config_service import ScoringConfigService, StaticConfigSource
from app.services.scoring_service import ChangeScoringService


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Score a change request wizard document.")
    parser.add_argument("path", help="Wizard JSON file, or '-' for stdin.")
    parser.add_argument(
        "--kind",
        type=str,
        default=None,
        help="Only print one score kind (benefit, effort, risk).",
    )
    parser.add_argument(
        "--factors",
        action="store_true",
        help="Include per-factor breakdowns.",
    )
    parser.add_argument(
        "--use-db-configs",
        action="store_true",
        help="Load active scoring configs from the database.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (e.g. INFO, DEBUG).",
    )
    return parser.parse_args()


def configure_logging(level: str) -> None:
    lvl = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
    )


def load_document(path: str) -> Dict[str, Any]:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as fh:
        return json.load(fh)


def render(result: ScoreResult, with_factors: bool) -> Dict[str, Any]:
    out: Dict[str, Any] = {"score": result.score}
    if result.level:
        out["level"] = result.level
    if result.warnings:
        out["warnings"] = list(result.warnings)
    if with_factors:
        out["factors"] = result.factors_document()
    return out


def main() -> int:
    args = parse_args()
    configure_logging(args.log_level)
    logger = logging.getLogger(__name__)

    kind = None
    if args.kind:
        try:
            kind = ScoreKind(args.kind.lower())
        except ValueError:
            logger.error("Unknown score kind: %s", args.kind)
            return 1

    try:
        document = load_document(args.path)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Could not read wizard document: %s", e)
        return 1

    db = None
    try:
        if args.use_db_configs:
            from app.db.session import SessionLocal

            db = SessionLocal()
            config_source = ScoringConfigService(db)
        else:
            config_source = StaticConfigSource()

        scores = ChangeScoringService(config_source).score(WizardInput.coerce(document))
        results = scores.results()
        if kind is not None:
            results = {kind: results[kind]}

        print(json.dumps({k.value: render(r, args.factors) for k, r in results.items()}, indent=2))
        return 0
    except Exception:
        logger.exception("score_wizard.cli.error")
        return 1
    finally:
        if db is not None:
            db.close()


if __name__ == "__main__":
    sys.exit(main())
