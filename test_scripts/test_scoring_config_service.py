# Tests for ScoringConfigService
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.db.base import Base
from app.db.models.scoring import BenefitScoringConfig, EffortScoringConfig
from app.schemas.scoring_config import DEFAULT_BENEFIT_CONFIGS, DEFAULT_EFFORT_CONFIGS
from app.services.errors import ConfigurationError
from app.services.scoring import calculate_benefit
from app.services.scoring_config_service import ScoringConfigService


def make_session():
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)()


def test_seed_inserts_defaults_once():
    db = make_session()
    svc = ScoringConfigService(db)

    inserted = svc.seed_default_configs()
    assert inserted == len(DEFAULT_BENEFIT_CONFIGS) + len(DEFAULT_EFFORT_CONFIGS)
    assert svc.seed_default_configs() == 0
    assert db.query(BenefitScoringConfig).count() == len(DEFAULT_BENEFIT_CONFIGS)
    assert db.query(EffortScoringConfig).count() == len(DEFAULT_EFFORT_CONFIGS)


def test_seeded_configs_round_trip_to_defaults():
    db = make_session()
    svc = ScoringConfigService(db)
    svc.seed_default_configs()

    assert svc.get_active_benefit_configs() == DEFAULT_BENEFIT_CONFIGS
    assert svc.get_active_effort_configs() == DEFAULT_EFFORT_CONFIGS


def test_inactive_rows_are_ignored():
    db = make_session()
    svc = ScoringConfigService(db)
    svc.seed_default_configs()
    row = db.query(BenefitScoringConfig).filter_by(benefit_type="revenueImprovement").one()
    row.is_active = False
    db.commit()

    configs = svc.get_active_benefit_configs()
    assert "revenueImprovement" not in configs
    assert "costSavings" in configs


def test_updated_row_changes_next_score(revenue_wizard):
    db = make_session()
    svc = ScoringConfigService(db)
    svc.seed_default_configs()
    row = db.query(BenefitScoringConfig).filter_by(benefit_type="revenueImprovement").one()
    row.value_for_100_points = 200000
    db.commit()

    res = calculate_benefit(revenue_wizard, configs=svc.get_active_benefit_configs())
    assert res.factors["revenueImprovement"].value_score == 50


def test_empty_tables_fall_back_to_defaults():
    db = make_session()
    svc = ScoringConfigService(db, fallback_to_defaults=True)
    assert svc.get_active_benefit_configs() == DEFAULT_BENEFIT_CONFIGS
    assert svc.get_active_effort_configs() == DEFAULT_EFFORT_CONFIGS


def test_empty_tables_without_fallback_raise():
    db = make_session()
    svc = ScoringConfigService(db, fallback_to_defaults=False)
    with pytest.raises(ConfigurationError):
        svc.get_active_benefit_configs()
    with pytest.raises(ConfigurationError):
        svc.get_active_effort_configs()


def test_effort_row_without_thresholds_loads_empty_list():
    db = make_session()
    db.add(EffortScoringConfig(effort_type="hoursEstimated", display_name="Hours", value_for_100_points=800, thresholds=None))
    db.commit()

    configs = ScoringConfigService(db).get_active_effort_configs()
    assert configs["hoursEstimated"].thresholds == []
    assert configs["hoursEstimated"].value_for_100_points == 800
