from .db import engine, SessionLocal, Base, init_db, create_db_engine
from .models import (
    EmploymentProfileDB,
    PayrollSettingsDB,
    TimeEntryDB
)
from .repository import PayrollRepository

__all__ = [
    'engine',
    'SessionLocal',
    'Base',
    'init_db',
    'create_db_engine',
    'EmploymentProfileDB',
    'PayrollSettingsDB',
    'TimeEntryDB',
    'PayrollRepository'
]
