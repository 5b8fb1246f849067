import os
import tempfile

# Settings are read at import time; point them at throwaway locations first
_TMP_DIR = tempfile.mkdtemp(prefix="timepay-tests-")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OUTPUT_DIR"] = os.path.join(_TMP_DIR, "output")
os.environ["DATA_DIR"] = os.path.join(_TMP_DIR, "data")

from datetime import date
from decimal import Decimal

import pytest

from timepay.database.db import Base, SessionLocal, engine, init_db
from timepay.database.repository import PayrollRepository
from timepay.models.employee import EmploymentProfile, EmploymentType
from timepay.models.period import PayPeriod
from timepay.models.time_entry import ApprovalStatus, TimeEntry, WorkType


@pytest.fixture
def period():
    return PayPeriod(2025, 3)


@pytest.fixture
def make_entry():
    def _make(day, total, overtime="0", company="Bright Academy",
              work_type=WorkType.TEACHING, status=ApprovalStatus.APPROVED, employee_id="T001"):
        if isinstance(day, int):
            day = date(2025, 3, day)
        return TimeEntry(
            employee_id=employee_id,
            entry_date=day,
            total_hours=Decimal(str(total)),
            overtime_hours=Decimal(str(overtime)),
            company=company,
            work_type=work_type,
            status=status,
        )
    return _make


@pytest.fixture
def hourly_profile():
    return EmploymentProfile(
        employee_id="T001",
        full_name="Somchai Jaidee",
        role="instructor",
        employment_type=EmploymentType.FULL_TIME,
        hourly_rate=Decimal("500"),
    )


@pytest.fixture
def scenario_a_entries(make_entry):
    """160 regular and 10 overtime hours over 20 weekdays"""
    days = [d for d in range(3, 29) if date(2025, 3, d).weekday() < 5][:20]
    return [make_entry(d, "8.5", "0.5") for d in days]


@pytest.fixture
def db_session():
    init_db()
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def repository(db_session):
    return PayrollRepository(db_session)
