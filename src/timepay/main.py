import logging
import sys
from datetime import date
from decimal import Decimal
from .config.settings import CURRENCY_SYMBOL, DEFAULT_HOURLY_RATE, LOG_LEVEL
from .database.db import init_db, SessionLocal
from .database.repository import PayrollRepository
from .models.period import PayPeriod
from .models.policy import build_policy
from .processors.monthly_summary_generator import MonthlySummaryGenerator
from .processors.payroll_calculator import PayrollService
from .utils.formatters import format_currency

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

def main(argv=None):
    """Write the monthly payroll summary for every employee in the database"""
    args = sys.argv[1:] if argv is None else argv
    period = PayPeriod.parse(args[0]) if args else PayPeriod.containing(date.today())

    logger.info("Starting payroll run for %s", period)

    # Initialize database
    init_db()

    db = SessionLocal()
    try:
        repo = PayrollRepository(db)
        employee_ids = [emp.id for emp in repo.get_all_employees()]
        service = PayrollService(repo, build_policy(default_hourly_rate=DEFAULT_HOURLY_RATE))
        run = service.compute_all(period, employee_ids)
    finally:
        db.close()

    filepath = MonthlySummaryGenerator().generate(run.results, period)
    logger.info("Payroll run finished: %d computed, %d excluded", len(run.results), len(run.excluded))

    print("=" * 60)
    print(f"Payroll summary {period}")
    print("=" * 60)
    print(f"Employees computed: {len(run.results)}")
    total_net = sum((result.net_income for result in run.results), Decimal("0"))
    print(f"Total net pay: {format_currency(total_net, CURRENCY_SYMBOL)}")
    if run.excluded:
        print(f"Excluded (no employment profile): {', '.join(run.excluded)}")
    print(f"Summary written to: {filepath}")
    print("=" * 60)
    return filepath

if __name__ == "__main__":
    main()
