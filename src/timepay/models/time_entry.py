from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

ZERO = Decimal("0")
UNSPECIFIED_COMPANY = "Unspecified"


class WorkType(str, Enum):
    TEACHING = "teaching"
    MEETING = "meeting"
    PREP = "prep"
    ADMIN = "admin"
    OTHER = "other"

    @classmethod
    def from_label(cls, label: Optional[str]) -> "WorkType":
        """Map a stored entry-type label onto the closed enumeration."""
        if isinstance(label, cls):
            return label
        try:
            return cls((label or "").strip().lower())
        except ValueError:
            return cls.OTHER


class ApprovalStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(frozen=True)
class TimeEntry:
    """One attendance record for one employee on one date"""
    employee_id: str
    entry_date: date
    total_hours: Decimal
    overtime_hours: Decimal = ZERO
    company: str = UNSPECIFIED_COMPANY
    work_type: WorkType = WorkType.OTHER
    status: ApprovalStatus = ApprovalStatus.APPROVED
    course: Optional[str] = None

    @property
    def regular_hours(self) -> Decimal:
        return self.total_hours - self.overtime_hours

    @property
    def is_approved(self) -> bool:
        return self.status == ApprovalStatus.APPROVED

    @property
    def is_anomalous(self) -> bool:
        return (
            self.total_hours < ZERO
            or self.overtime_hours < ZERO
            or self.overtime_hours > self.total_hours
        )

    def sanitized(self) -> "TimeEntry":
        """Floor negative hours at zero and clamp overtime to the total."""
        total = max(self.total_hours, ZERO)
        overtime = min(max(self.overtime_hours, ZERO), total)
        if total == self.total_hours and overtime == self.overtime_hours:
            return self
        return replace(self, total_hours=total, overtime_hours=overtime)
