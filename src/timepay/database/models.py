from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from datetime import datetime
from .db import Base

class EmploymentProfileDB(Base):
    """Employee profile database model"""
    __tablename__ = "employment_profiles"

    id = Column(String, primary_key=True)
    full_name = Column(String, nullable=False)
    role = Column(String(20), default='staff')  # 'instructor', 'admin', 'staff'
    employment_type = Column(String(20), default='fulltime')

    # Fallback pay basis
    hourly_rate = Column(Numeric(10, 2))
    base_salary = Column(Numeric(10, 2))

    # Allowances
    transport_allowance = Column(Numeric(10, 2))
    meal_allowance = Column(Numeric(10, 2))
    phone_allowance = Column(Numeric(10, 2))
    housing_allowance = Column(Numeric(10, 2))
    health_insurance = Column(Numeric(10, 2))

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    time_entries = relationship("TimeEntryDB", back_populates="employee", cascade="all, delete-orphan")
    payroll_settings = relationship("PayrollSettingsDB", back_populates="employee", uselist=False,
                                    cascade="all, delete-orphan")

    def __repr__(self):
        return f"<EmploymentProfile(id={self.id}, name={self.full_name})>"


class PayrollSettingsDB(Base):
    """Advanced per-employee payroll settings; NULL columns fall back"""
    __tablename__ = "payroll_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    employee_id = Column(String, ForeignKey('employment_profiles.id'), nullable=False, unique=True)

    # Rates
    hourly_rate = Column(Numeric(10, 2))
    base_salary = Column(Numeric(10, 2))
    overtime_multiplier = Column(Numeric(4, 2))

    # Deduction toggles
    enable_social_security = Column(Boolean)
    enable_tax_withholding = Column(Boolean)
    enable_provident_fund = Column(Boolean)
    enable_health_insurance = Column(Boolean)

    # Deduction rates
    social_security_rate = Column(Numeric(6, 4))
    tax_withholding_rate = Column(Numeric(6, 4))
    provident_fund_rate = Column(Numeric(6, 4))

    # Allowances
    transport_allowance = Column(Numeric(10, 2))
    meal_allowance = Column(Numeric(10, 2))
    phone_allowance = Column(Numeric(10, 2))
    housing_allowance = Column(Numeric(10, 2))
    health_insurance = Column(Numeric(10, 2))

    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    employee = relationship("EmploymentProfileDB", back_populates="payroll_settings")

    def __repr__(self):
        return f"<PayrollSettings(employee={self.employee_id})>"


class TimeEntryDB(Base):
    """Attendance record database model"""
    __tablename__ = "time_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    employee_id = Column(String, ForeignKey('employment_profiles.id'), nullable=False, index=True)
    entry_date = Column(Date, nullable=False, index=True)

    # Hours
    total_hours = Column(Numeric(6, 2), nullable=False, default=0)
    overtime_hours = Column(Numeric(6, 2), nullable=False, default=0)

    # Classification
    company = Column(String(100))
    entry_type = Column(String(20), default='other')  # 'teaching', 'meeting', 'prep', 'admin', 'other'
    status = Column(String(20), default='pending', index=True)  # 'pending', 'approved', 'rejected'
    course = Column(String(255))

    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    employee = relationship("EmploymentProfileDB", back_populates="time_entries")

    def __repr__(self):
        return f"<TimeEntry(employee={self.employee_id}, date={self.entry_date}, hours={self.total_hours})>"
