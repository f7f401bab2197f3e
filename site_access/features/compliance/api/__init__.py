"""Outward payloads handed to roster, gate and analytics collaborators."""

from .schemas import ModuleDetail, ReportContext, RosterRow, VerificationResponse

__all__ = ["ModuleDetail", "ReportContext", "RosterRow", "VerificationResponse"]
