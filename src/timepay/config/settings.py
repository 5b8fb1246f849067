import os
from decimal import Decimal
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent

# Paths
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", str(BASE_DIR / "output")))
DATA_DIR = Path(os.getenv("DATA_DIR", str(BASE_DIR / "data")))

# Database
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR / 'timepay.db'}")

# Ensure directories exist
OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
(OUTPUT_DIR / "payslips").mkdir(exist_ok=True)
(OUTPUT_DIR / "monthly").mkdir(exist_ok=True)
DATA_DIR.mkdir(parents=True, exist_ok=True)

# Application settings
DEBUG = os.getenv("DEBUG", "False").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Payroll settings
DEFAULT_HOURLY_RATE = Decimal(os.getenv("DEFAULT_HOURLY_RATE", "500"))
CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "฿")

# Secret for Flask app
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
