import csv
import io
from decimal import Decimal
from pathlib import Path

import pytest

from timepay.models.payroll import PayrollSettings
from timepay.models.time_entry import WorkType
from timepay.processors.monthly_summary_generator import HEADERS, MonthlySummaryGenerator
from timepay.processors.payroll_calculator import calculate_payroll
from timepay.processors.payslip_generator import (
    DEDUCTIONS, EARNINGS, SUMMARY, PayslipGenerator, read_payslip_figures
)


@pytest.fixture
def result(hourly_profile, make_entry, scenario_a_entries, period):
    entries = scenario_a_entries + [make_entry(31, "3.5", company="Sunrise Tutoring", work_type=WorkType.MEETING)]
    settings = PayrollSettings(employee_id="T001", meal_allowance=Decimal("1234.56"),
                               health_insurance=Decimal("333.33"), enable_health_insurance=True)
    return calculate_payroll(hourly_profile, settings, entries, period)


def parse(data):
    return list(csv.reader(io.StringIO(data.decode("utf-8-sig"))))


def test_payslip_starts_with_bom(result):
    data = PayslipGenerator().render(result)

    assert data.startswith(b"\xef\xbb\xbf")


def test_payslip_cells_are_quoted(result):
    text = PayslipGenerator().render(result).decode("utf-8-sig")

    assert text.splitlines()[0] == '"Payslip - Somchai Jaidee"'
    assert '"Net income","' in text


def test_payslip_has_section_markers(result):
    rows = parse(PayslipGenerator().render(result))
    markers = [row[0] for row in rows if row and row[0].startswith("===")]

    assert markers == [
        "=== Work Time ===",
        "=== Earnings ===",
        "=== Deductions ===",
        "=== Summary ===",
        "=== Company Breakdown ===",
        "=== Work Type Breakdown ===",
    ]
    # every section after the first is preceded by a blank row
    for index, row in enumerate(rows):
        if row and row[0].startswith("===") and row[0] != "=== Work Time ===":
            assert rows[index - 1] == []


def test_payslip_round_trip(result):
    figures = read_payslip_figures(PayslipGenerator().render(result))
    earnings = result.earnings
    deductions = result.deductions

    assert figures[EARNINGS]["Regular pay"] == earnings.regular_pay
    assert figures[EARNINGS]["Overtime pay"] == earnings.overtime_pay
    assert figures[EARNINGS]["Meal allowance"] == Decimal("1234.56")
    assert figures[EARNINGS]["Gross income"] == earnings.gross_income
    assert figures[DEDUCTIONS]["Social security"] == deductions.social_security
    assert figures[DEDUCTIONS]["Withholding tax"] == deductions.tax_withholding
    assert figures[DEDUCTIONS]["Provident fund"] == deductions.provident_fund
    assert figures[DEDUCTIONS]["Health insurance"] == Decimal("333.33")
    assert figures[DEDUCTIONS]["Income tax"] == result.income_tax
    assert figures[DEDUCTIONS]["Total deductions"] == result.total_deductions
    assert figures[SUMMARY]["Net income"] == result.net_income


def test_payslip_company_breakdown_rows(result):
    rows = parse(PayslipGenerator().render(result))
    start = rows.index(["=== Company Breakdown ==="])
    table = rows[start + 2:start + 4]

    assert [row[0] for row in table] == ["Bright Academy", "Sunrise Tutoring"]
    assert table[1] == ["Sunrise Tutoring", "1", "3.50", "0.00", "1750.00", "0.00", "1750.00"]


def test_payslip_file_written(result, tmp_path):
    generator = PayslipGenerator(output_dir=tmp_path)

    filepath = Path(generator.generate(result))

    assert filepath.name == "T001_2025_03_payslip.csv"
    assert filepath.read_bytes() == generator.render(result)


def test_bulk_summary_columns(result, period, hourly_profile):
    other = calculate_payroll(hourly_profile, None, [], period)
    rows = parse(MonthlySummaryGenerator().render([result, other], period))

    assert rows[0] == ["Payroll summary March 2025"]
    assert rows[1] == []
    assert rows[2] == HEADERS
    assert len(rows) == 5
    first = dict(zip(HEADERS, rows[3]))
    assert first["Name"] == "Somchai Jaidee"
    assert first["Role"] == "instructor"
    assert first["Work Days"] == "21"
    assert Decimal(first["Gross Income"]) == result.gross_income
    assert Decimal(first["Income Tax"]) == result.income_tax
    assert Decimal(first["Net Income"]) == result.net_income
    assert dict(zip(HEADERS, rows[4]))["Net Income"] == "0.00"


def test_bulk_summary_file_written(result, period, tmp_path):
    filepath = Path(MonthlySummaryGenerator(output_dir=tmp_path).generate([result], period))

    assert filepath.name == "monthly_summary_2025_03.csv"
    assert filepath.read_bytes().startswith(b"\xef\xbb\xbf")
