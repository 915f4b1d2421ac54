from .change_request import (
	ChangeStatus,
	CabDecision,
	ChangePriority,
	TERMINAL_STATUSES,
	ChangeRequestRead,
	ChangeReviewVoteRead,
	ChangeCommentRead,
)
from .wizard import WizardInput, ChangeReasons, UrgencyLevel
from .cab_assessment import CabAssessment, BenefitFactorAssessment
from .scoring_config import (
	BenefitConfig,
	EffortConfig,
	DEFAULT_BENEFIT_CONFIGS,
	DEFAULT_EFFORT_CONFIGS,
)

__all__ = [
	"ChangeStatus",
	"CabDecision",
	"ChangePriority",
	"TERMINAL_STATUSES",
	"ChangeRequestRead",
	"ChangeReviewVoteRead",
	"ChangeCommentRead",
	"WizardInput",
	"ChangeReasons",
	"UrgencyLevel",
	"CabAssessment",
	"BenefitFactorAssessment",
	"BenefitConfig",
	"EffortConfig",
	"DEFAULT_BENEFIT_CONFIGS",
	"DEFAULT_EFFORT_CONFIGS",
]
