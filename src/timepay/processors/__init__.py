from .time_entry_aggregator import aggregate_time_entries
from .rate_resolver import POSITION_PRESETS, resolve_settings, settings_from_preset
from .earnings_calculator import calculate_earnings
from .deduction_calculator import calculate_deductions
from .personal_tax_calculator import PersonalTaxCalculator
from .payroll_calculator import BulkPayrollRun, PayrollDataSource, PayrollService, calculate_payroll
from .payslip_generator import PayslipGenerator, read_payslip_figures
from .monthly_summary_generator import MonthlySummaryGenerator


__all__ = [
    'aggregate_time_entries',
    'POSITION_PRESETS',
    'resolve_settings',
    'settings_from_preset',
    'calculate_earnings',
    'calculate_deductions',
    'PersonalTaxCalculator',
    'BulkPayrollRun',
    'PayrollDataSource',
    'PayrollService',
    'calculate_payroll',
    'PayslipGenerator',
    'read_payslip_figures',
    'MonthlySummaryGenerator'
]
