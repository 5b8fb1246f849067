from sqlalchemy.orm import Session
from sqlalchemy import and_
from typing import List, Optional
from datetime import date
from decimal import Decimal
from .models import EmploymentProfileDB, PayrollSettingsDB, TimeEntryDB
from ..models.employee import EmploymentProfile, EmploymentType
from ..models.payroll import PayrollSettings
from ..models.time_entry import ApprovalStatus, TimeEntry, UNSPECIFIED_COMPANY, WorkType
from ..utils.validators import validate_rate

_SHARED_PAY_FIELDS = (
    'hourly_rate',
    'base_salary',
    'transport_allowance',
    'meal_allowance',
    'phone_allowance',
    'housing_allowance',
    'health_insurance',
)

_SETTINGS_FIELDS = _SHARED_PAY_FIELDS + (
    'overtime_multiplier',
    'enable_social_security',
    'enable_tax_withholding',
    'enable_provident_fund',
    'enable_health_insurance',
    'social_security_rate',
    'tax_withholding_rate',
    'provident_fund_rate',
)

class PayrollRepository:
    """Repository for the records payroll is computed from"""

    def __init__(self, db_session: Session):
        self.db = db_session

    # ========== Employment Profile Operations ==========

    def save_employment_profile(self, profile: EmploymentProfile) -> EmploymentProfileDB:
        """Save or update employment profile"""
        db_profile = self.db.query(EmploymentProfileDB).filter_by(id=profile.employee_id).first()
        if not db_profile:
            db_profile = EmploymentProfileDB(id=profile.employee_id)
            self.db.add(db_profile)
        db_profile.full_name = profile.full_name
        db_profile.role = profile.role
        db_profile.employment_type = EmploymentType(profile.employment_type).value
        for name in _SHARED_PAY_FIELDS:
            setattr(db_profile, name, getattr(profile, name))
        self.db.commit()
        self.db.refresh(db_profile)
        return db_profile

    def fetch_employment_profile(self, employee_id: str) -> Optional[EmploymentProfile]:
        """Get employment profile by employee ID"""
        row = self.db.query(EmploymentProfileDB).filter_by(id=employee_id).first()
        if not row:
            return None
        return EmploymentProfile(
            employee_id=row.id,
            full_name=row.full_name,
            role=row.role or 'staff',
            employment_type=EmploymentType(row.employment_type or EmploymentType.FULL_TIME.value),
            **{name: self._decimal(getattr(row, name)) for name in _SHARED_PAY_FIELDS}
        )

    def get_all_employees(self) -> List[EmploymentProfileDB]:
        """Get all employees ordered by name"""
        return self.db.query(EmploymentProfileDB).order_by(EmploymentProfileDB.full_name).all()

    # ========== Payroll Settings Operations ==========

    def save_payroll_settings(self, settings: PayrollSettings) -> PayrollSettingsDB:
        """Save or replace advanced payroll settings"""
        for name in ('social_security_rate', 'tax_withholding_rate', 'provident_fund_rate'):
            rate = getattr(settings, name)
            if rate is not None and not validate_rate(rate):
                raise ValueError(f"{name} must be between 0 and 1, got {rate}")

        row = self.db.query(PayrollSettingsDB).filter_by(employee_id=settings.employee_id).first()
        if not row:
            row = PayrollSettingsDB(employee_id=settings.employee_id)
            self.db.add(row)
        for name in _SETTINGS_FIELDS:
            setattr(row, name, getattr(settings, name))
        self.db.commit()
        self.db.refresh(row)
        return row

    def fetch_payroll_settings(self, employee_id: str) -> Optional[PayrollSettings]:
        """Get advanced payroll settings, or None if the employee has none"""
        row = self.db.query(PayrollSettingsDB).filter_by(employee_id=employee_id).first()
        if not row:
            return None
        values = {}
        for name in _SETTINGS_FIELDS:
            value = getattr(row, name)
            values[name] = value if isinstance(value, bool) or value is None else self._decimal(value)
        return PayrollSettings(employee_id=row.employee_id, **values)

    def delete_payroll_settings(self, employee_id: str) -> bool:
        """Remove advanced settings so the employee falls back to profile values"""
        row = self.db.query(PayrollSettingsDB).filter_by(employee_id=employee_id).first()
        if not row:
            return False
        self.db.delete(row)
        self.db.commit()
        return True

    # ========== Time Entry Operations ==========

    def save_time_entry(self, entry: TimeEntry) -> TimeEntryDB:
        """Store an attendance record as given"""
        row = TimeEntryDB(
            employee_id=entry.employee_id,
            entry_date=entry.entry_date,
            total_hours=entry.total_hours,
            overtime_hours=entry.overtime_hours,
            company=entry.company,
            entry_type=WorkType.from_label(entry.work_type).value,
            status=ApprovalStatus(entry.status).value,
            course=entry.course
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    def delete_time_entries(self, employee_id: str, period_start: date, period_end: date) -> int:
        """Remove an employee's entries within [period_start, period_end], any status"""
        deleted = self.db.query(TimeEntryDB).filter(
            and_(
                TimeEntryDB.employee_id == employee_id,
                TimeEntryDB.entry_date >= period_start,
                TimeEntryDB.entry_date <= period_end
            )
        ).delete(synchronize_session=False)
        self.db.commit()
        return deleted

    def fetch_approved_time_entries(self, employee_id: str, period_start: date,
                                    period_end: date) -> List[TimeEntry]:
        """Approved entries of one employee within [period_start, period_end]"""
        rows = self.db.query(TimeEntryDB).filter(
            and_(
                TimeEntryDB.employee_id == employee_id,
                TimeEntryDB.entry_date >= period_start,
                TimeEntryDB.entry_date <= period_end,
                TimeEntryDB.status == ApprovalStatus.APPROVED.value
            )
        ).order_by(TimeEntryDB.entry_date, TimeEntryDB.id).all()

        return [
            TimeEntry(
                employee_id=row.employee_id,
                entry_date=row.entry_date,
                total_hours=self._decimal(row.total_hours) or Decimal('0'),
                overtime_hours=self._decimal(row.overtime_hours) or Decimal('0'),
                company=row.company or UNSPECIFIED_COMPANY,
                work_type=WorkType.from_label(row.entry_type),
                status=ApprovalStatus(row.status),
                course=row.course
            )
            for row in rows
        ]

    # ========== Helper Methods ==========

    def _decimal(self, value) -> Optional[Decimal]:
        """Numeric columns may come back as float on SQLite"""
        if value is None:
            return None
        if isinstance(value, Decimal):
            return value
        return Decimal(str(value))
