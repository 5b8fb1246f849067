from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class EmploymentType(str, Enum):
    FULL_TIME = "fulltime"
    PART_TIME = "parttime"
    INTERN = "intern"
    PROBATION = "probation"
    LEAD = "leader"


@dataclass(frozen=True)
class EmploymentProfile:
    """Pay-relevant attributes of one employee.

    Rates and amounts left as ``None`` fall through to the system defaults
    during settings resolution.
    """
    employee_id: str
    full_name: str
    role: str = "staff"
    employment_type: EmploymentType = EmploymentType.FULL_TIME
    hourly_rate: Optional[Decimal] = None
    base_salary: Optional[Decimal] = None
    transport_allowance: Optional[Decimal] = None
    meal_allowance: Optional[Decimal] = None
    phone_allowance: Optional[Decimal] = None
    housing_allowance: Optional[Decimal] = None
    health_insurance: Optional[Decimal] = None

    def __str__(self):
        return f"EmploymentProfile({self.employee_id}, {self.full_name})"
