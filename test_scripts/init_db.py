# change_cab_project/test_scripts/init_db.py

"""
Initialize database schema by creating all tables defined by SQLAlchemy models,
then seed the default scoring configs.
"""

from app.db.schema_ensure import ensure_schema
from app.db.session import SessionLocal, engine
from app.services.scoring_config_service import ScoringConfigService


def main() -> None:
    print("Creating all tables using SQLAlchemy metadata...")
    ensure_schema(engine)
    db = SessionLocal()
    try:
        inserted = ScoringConfigService(db).seed_default_configs()
    finally:
        db.close()
    print(f"Done. Seeded {inserted} scoring config rows.")

if __name__ == "__main__":
    main()
