from pathlib import Path
from typing import List, Optional, Sequence

from ..config.settings import OUTPUT_DIR
from ..models.payroll import PayrollResult
from ..models.period import PayPeriod
from ..utils.formatters import format_amount, format_hours, format_period_label
from .payslip_generator import write_csv

HEADERS = [
    'Name',
    'Role',
    'Work Days',
    'Regular Hours',
    'Overtime Hours',
    'Gross Income',
    'Social Security',
    'Withholding Tax',
    'Provident Fund',
    'Health Insurance',
    'Income Tax',
    'Total Deductions',
    'Net Income',
]


class MonthlySummaryGenerator:
    """Generate the monthly payroll summary for all employees"""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = Path(output_dir) if output_dir else OUTPUT_DIR / "monthly"

    def rows(self, results: Sequence[PayrollResult], period: PayPeriod) -> List[List[str]]:
        rows = [
            [f"Payroll summary {format_period_label(period)}"],
            [],
            list(HEADERS),
        ]

        for result in results:
            deductions = result.deductions
            rows.append([
                result.employee_name,
                result.role,
                str(result.work_days),
                format_hours(result.regular_hours),
                format_hours(result.overtime_hours),
                format_amount(result.gross_income),
                format_amount(deductions.social_security),
                format_amount(deductions.tax_withholding),
                format_amount(deductions.provident_fund),
                format_amount(deductions.health_insurance),
                format_amount(result.income_tax),
                format_amount(result.total_deductions),
                format_amount(result.net_income),
            ])

        return rows

    def render(self, results: Sequence[PayrollResult], period: PayPeriod) -> bytes:
        """Summary as CSV bytes, one row per employee"""
        return write_csv(self.rows(results, period))

    def generate(self, results: Sequence[PayrollResult], period: PayPeriod) -> str:
        """Write the summary under the output directory and return its path"""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.output_dir / f"monthly_summary_{period.year}_{period.month:02d}.csv"
        filepath.write_bytes(self.render(results, period))
        return str(filepath)
