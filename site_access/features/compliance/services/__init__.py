"""
Collaborator-facing services built on the compliance engine.

Each service formats engine output for one consumer (roster, gate, card
printing, renewals, analytics, training reports) or prepares inputs for it
(grading).
"""

from .analytics_service import build_report_context
from .card_service import CardService, card_service
from .grading_service import Attempt, GradeResult, GradingService, grading_service
from .renewal_service import ExpiringCertificate, find_expiring
from .roster_service import RosterService, roster_service
from .training_report_service import (
    TrainingReport,
    TrainingReportService,
    build_training_report,
    training_report_service,
)
from .verification_service import VerificationService, verification_service, verify_badge

__all__ = [
    "Attempt",
    "CardService",
    "ExpiringCertificate",
    "GradeResult",
    "GradingService",
    "RosterService",
    "TrainingReport",
    "TrainingReportService",
    "VerificationService",
    "build_report_context",
    "build_training_report",
    "card_service",
    "find_expiring",
    "grading_service",
    "roster_service",
    "training_report_service",
    "verification_service",
    "verify_badge",
]
