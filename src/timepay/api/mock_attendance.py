from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, List, Optional
import random
from ..models.employee import EmploymentProfile, EmploymentType
from ..models.payroll import PayrollSettings
from ..models.period import PayPeriod
from ..models.time_entry import ApprovalStatus, TimeEntry, WorkType
from ..processors.rate_resolver import settings_from_preset

class MockAttendanceAPI:
    """Mock attendance and HR system for demos and local runs"""

    # Sample employee data; T004 has attendance but no employment profile
    MOCK_EMPLOYEES = [
        {
            "employee_id": "T001",
            "full_name": "Somchai Jaidee",
            "role": "instructor",
            "employment_type": EmploymentType.FULL_TIME,
            "hourly_rate": Decimal('500'),
            "preset": False,
        },
        {
            "employee_id": "T002",
            "full_name": "Malee Srisuk",
            "role": "instructor",
            "employment_type": EmploymentType.PART_TIME,
            "hourly_rate": Decimal('400'),
            "preset": True,
        },
        {
            "employee_id": "T003",
            "full_name": "Anan Wongsa",
            "role": "admin",
            "employment_type": EmploymentType.FULL_TIME,
            "base_salary": Decimal('30000'),
            "transport_allowance": Decimal('2000'),
            "preset": False,
        },
        {
            "employee_id": "T004",
            "full_name": "Niran Thongdee",
            "role": "instructor",
            "employment_type": None,
        },
    ]

    COMPANIES = ["Bright Academy", "Sunrise Tutoring", "City Language School"]

    WORK_TYPES = [WorkType.TEACHING, WorkType.TEACHING, WorkType.PREP, WorkType.MEETING, WorkType.ADMIN]

    def __init__(self, seed: str = "timepay"):
        self.seed = seed

    def get_all_employees(self) -> List[Dict[str, str]]:
        """Get list of all employees known to attendance"""
        return [
            {"employee_id": emp["employee_id"], "full_name": emp["full_name"], "role": emp["role"]}
            for emp in self.MOCK_EMPLOYEES
        ]

    def fetch_employment_profile(self, employee_id: str) -> Optional[EmploymentProfile]:
        employee = self._employee(employee_id)
        if not employee or employee["employment_type"] is None:
            return None
        return EmploymentProfile(
            employee_id=employee["employee_id"],
            full_name=employee["full_name"],
            role=employee["role"],
            employment_type=employee["employment_type"],
            hourly_rate=employee.get("hourly_rate"),
            base_salary=employee.get("base_salary"),
            transport_allowance=employee.get("transport_allowance"),
        )

    def fetch_payroll_settings(self, employee_id: str) -> Optional[PayrollSettings]:
        employee = self._employee(employee_id)
        if not employee or not employee.get("preset"):
            return None
        return settings_from_preset(employee_id, employee["employment_type"])

    def fetch_approved_time_entries(self, employee_id: str, period_start: date,
                                    period_end: date) -> List[TimeEntry]:
        entries = []
        period = PayPeriod.containing(period_start)
        while period.start <= period_end:
            entries.extend(
                entry for entry in self.generate_time_entries(employee_id, period)
                if entry.is_approved and period_start <= entry.entry_date <= period_end
            )
            period = PayPeriod.containing(period.end + timedelta(days=1))
        return entries

    def generate_time_entries(self, employee_id: str, period: PayPeriod) -> List[TimeEntry]:
        """All attendance records of one month, pending and rejected included"""
        if not self._employee(employee_id):
            return []

        # Same employee and month always yield the same records
        rng = random.Random(f"{self.seed}:{employee_id}:{period}")
        entries = []
        day = period.start
        while day <= period.end:
            if day.weekday() < 5 and rng.random() < 0.85:
                total = Decimal(rng.randint(8, 20)) / 2
                overtime = total - Decimal('8') if total > 8 else Decimal('0')
                roll = rng.random()
                if roll < 0.05:
                    status = ApprovalStatus.REJECTED
                elif roll < 0.15:
                    status = ApprovalStatus.PENDING
                else:
                    status = ApprovalStatus.APPROVED
                entries.append(TimeEntry(
                    employee_id=employee_id,
                    entry_date=day,
                    total_hours=total,
                    overtime_hours=overtime,
                    company=rng.choice(self.COMPANIES),
                    work_type=rng.choice(self.WORK_TYPES),
                    status=status,
                ))
            day += timedelta(days=1)
        return entries

    def seed_repository(self, repository, period: PayPeriod) -> Dict[str, int]:
        """Copy profiles, settings and one month of attendance into a repository.

        Safe to repeat: the month's existing entries are replaced.
        """
        counts = {"profiles": 0, "settings": 0, "time_entries": 0}

        for emp in self.MOCK_EMPLOYEES:
            profile = self.fetch_employment_profile(emp["employee_id"])
            if profile is None:
                continue
            repository.save_employment_profile(profile)
            counts["profiles"] += 1

            settings = self.fetch_payroll_settings(emp["employee_id"])
            if settings is not None:
                repository.save_payroll_settings(settings)
                counts["settings"] += 1

            repository.delete_time_entries(emp["employee_id"], period.start, period.end)
            for entry in self.generate_time_entries(emp["employee_id"], period):
                repository.save_time_entry(entry)
                counts["time_entries"] += 1

        return counts

    def _employee(self, employee_id: str) -> Optional[Dict]:
        return next((e for e in self.MOCK_EMPLOYEES if e['employee_id'] == employee_id), None)
