# app/db/models/__init__.py

from .change_request import ChangeRequest
from .review import ChangeReviewVote, ChangeComment
from .scoring import BenefitScoringConfig, EffortScoringConfig, ChangeScoreSnapshot

__all__ = [
    "ChangeRequest",
    "ChangeReviewVote",
    "ChangeComment",
    "BenefitScoringConfig",
    "EffortScoringConfig",
    "ChangeScoreSnapshot",
]
# This file ensures that all models are imported when the models package is imported
