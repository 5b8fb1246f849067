"""
Exception classes for the payroll engine
"""

from typing import Optional


class PayrollError(Exception):
    """Base class for payroll engine errors."""


class ProfileNotFound(PayrollError):
    """Employee has no employment profile; payroll cannot be computed."""

    def __init__(self, employee_id: Optional[str] = None):
        self.employee_id = employee_id
        detail = "Employment profile not found"
        if employee_id:
            detail += f" (ID: {employee_id})"
        super().__init__(detail)


class InvalidPeriod(PayrollError, ValueError):
    """Pay period string is not a valid YYYY-MM month."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid pay period: {value!r} (expected YYYY-MM)")
