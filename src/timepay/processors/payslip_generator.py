import csv
import io
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Dict, List, Optional

from ..config.settings import CURRENCY_SYMBOL, OUTPUT_DIR
from ..models.payroll import PayrollResult
from ..utils.formatters import format_amount, format_hours

BOM = "\ufeff"
SECTION_MARKER = "=== {} ==="

WORK_TIME = "Work Time"
EARNINGS = "Earnings"
DEDUCTIONS = "Deductions"
SUMMARY = "Summary"
COMPANY_BREAKDOWN = "Company Breakdown"
WORK_TYPE_BREAKDOWN = "Work Type Breakdown"


def write_csv(rows: List[List[str]]) -> bytes:
    """Serialize rows as quoted CSV, UTF-8 with byte-order mark"""
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for row in rows:
        writer.writerow(row)
    content = output.getvalue()
    output.close()
    return (BOM + content).encode("utf-8")


class PayslipGenerator:
    """Generate individual payslip CSV files"""

    def __init__(self, output_dir: Optional[Path] = None, currency: str = CURRENCY_SYMBOL):
        self.output_dir = Path(output_dir) if output_dir else OUTPUT_DIR / "payslips"
        self.currency = currency

    def rows(self, result: PayrollResult) -> List[List[str]]:
        earnings = result.earnings
        deductions = result.deductions
        money = self.currency

        rows = [
            [f"Payslip - {result.employee_name}"],
            [f"Period {result.period}"],
            [],
            ["Item", "Amount", "Unit"],
        ]

        # Work time
        rows.append([SECTION_MARKER.format(WORK_TIME), "", ""])
        rows += [
            ["Work days", str(result.work_days), "days"],
            ["Regular hours", format_hours(result.regular_hours), "hours"],
            ["Overtime hours", format_hours(result.overtime_hours), "hours"],
            ["Total hours", format_hours(result.total_hours), "hours"],
            ["Hourly rate", format_amount(result.hourly_rate), money],
            ["Overtime multiplier", str(result.overtime_multiplier), "x"],
        ]
        rows.append([])

        # Earnings
        rows.append([SECTION_MARKER.format(EARNINGS), "", ""])
        rows += [
            ["Base salary", format_amount(earnings.base_salary), money],
            ["Regular pay", format_amount(earnings.regular_pay), money],
            ["Overtime pay", format_amount(earnings.overtime_pay), money],
            ["Transport allowance", format_amount(earnings.transport_allowance), money],
            ["Meal allowance", format_amount(earnings.meal_allowance), money],
            ["Phone allowance", format_amount(earnings.phone_allowance), money],
            ["Housing allowance", format_amount(earnings.housing_allowance), money],
            ["Total allowances", format_amount(earnings.total_allowances), money],
            ["Gross income", format_amount(earnings.gross_income), money],
        ]
        rows.append([])

        # Deductions
        rows.append([SECTION_MARKER.format(DEDUCTIONS), "", ""])
        rows += [
            ["Social security", format_amount(deductions.social_security), money],
            ["Withholding tax", format_amount(deductions.tax_withholding), money],
            ["Provident fund", format_amount(deductions.provident_fund), money],
            ["Health insurance", format_amount(deductions.health_insurance), money],
            ["Income tax", format_amount(result.income_tax), money],
            ["Total deductions", format_amount(result.total_deductions), money],
        ]
        rows.append([])

        # Summary
        rows.append([SECTION_MARKER.format(SUMMARY), "", ""])
        rows += [
            ["Gross income", format_amount(result.gross_income), money],
            ["Total deductions", format_amount(result.total_deductions), money],
            ["Net income", format_amount(result.net_income), money],
            ["Advanced settings", "Yes" if result.using_advanced_settings else "No", ""],
        ]

        if result.company_breakdown:
            rows.append([])
            rows.append([SECTION_MARKER.format(COMPANY_BREAKDOWN)])
            rows.append(["Company", "Days", "Regular hours", "Overtime hours",
                         "Regular pay", "Overtime pay", "Total pay"])
            for item in result.company_breakdown:
                rows.append([
                    item.company,
                    str(item.days),
                    format_hours(item.regular_hours),
                    format_hours(item.overtime_hours),
                    format_amount(item.regular_pay),
                    format_amount(item.overtime_pay),
                    format_amount(item.total_pay),
                ])

        if result.work_type_breakdown:
            rows.append([])
            rows.append([SECTION_MARKER.format(WORK_TYPE_BREAKDOWN)])
            rows.append(["Work type", "Regular hours", "Overtime hours",
                         "Regular pay", "Overtime pay", "Total pay"])
            for work_type, item in result.work_type_breakdown.items():
                rows.append([
                    work_type.value,
                    format_hours(item.regular_hours),
                    format_hours(item.overtime_hours),
                    format_amount(item.regular_pay),
                    format_amount(item.overtime_pay),
                    format_amount(item.total_pay),
                ])

        return rows

    def render(self, result: PayrollResult) -> bytes:
        """Payslip as CSV bytes"""
        return write_csv(self.rows(result))

    def filename(self, result: PayrollResult) -> str:
        safe_employee_id = result.employee_id.replace('/', '-').replace('\\', '-')
        return f"{safe_employee_id}_{result.period.year}_{result.period.month:02d}_payslip.csv"

    def generate(self, result: PayrollResult) -> str:
        """Write the payslip under the output directory and return its path"""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.output_dir / self.filename(result)
        filepath.write_bytes(self.render(result))
        return str(filepath)


def read_payslip_figures(data: bytes) -> Dict[str, Dict[str, Decimal]]:
    """
    Parse the numeric item rows of a payslip CSV back into Decimals,
    grouped by section (work time, earnings, deductions, summary).
    """
    text = data.decode("utf-8-sig")
    figures: Dict[str, Dict[str, Decimal]] = {}
    section = None

    for row in csv.reader(io.StringIO(text)):
        if not row or not row[0]:
            continue
        label = row[0]
        if label.startswith("=== ") and label.endswith(" ==="):
            section = label[4:-4]
            continue
        if section not in (WORK_TIME, EARNINGS, DEDUCTIONS, SUMMARY) or len(row) != 3:
            continue
        try:
            figures.setdefault(section, {})[label] = Decimal(row[1])
        except InvalidOperation:
            continue

    return figures
