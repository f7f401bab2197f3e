"""Exceptions raised by compliance services outside the pure engine."""


class ComplianceError(Exception):
    """Base error for the compliance feature."""


class UnknownModuleError(ComplianceError):
    """Raised when grading references a module code that is not in the catalog."""

    def __init__(self, code: str):
        super().__init__(f"Module '{code}' is not defined in the catalog")
        self.code = code


class GradingError(ComplianceError):
    """Raised for attempts whose scores cannot be graded."""
