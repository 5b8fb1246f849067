from decimal import Decimal

from ..models.payroll import Deductions, EffectiveSettings
from ..models.policy import DEFAULT_POLICY, PayrollPolicy
from ..utils.money import to_money

ZERO = Decimal("0.00")


def calculate_social_security(gross_income: Decimal, rate: Decimal,
                              policy: PayrollPolicy = DEFAULT_POLICY) -> Decimal:
    """Contribution at ``rate``, capped at the statutory ceiling"""
    return min(to_money(gross_income * rate), to_money(policy.social_security_cap))


def calculate_deductions(gross_income: Decimal, settings: EffectiveSettings,
                         policy: PayrollPolicy = DEFAULT_POLICY) -> Deductions:
    """
    Statutory deductions on gross income.

    Each line is computed independently; a disabled toggle yields exactly
    zero so every line is always present.
    """
    social_security = ZERO
    if settings.enable_social_security:
        social_security = calculate_social_security(gross_income, settings.social_security_rate, policy)

    tax_withholding = ZERO
    if settings.enable_tax_withholding:
        tax_withholding = to_money(gross_income * settings.tax_withholding_rate)

    provident_fund = ZERO
    if settings.enable_provident_fund:
        provident_fund = to_money(gross_income * settings.provident_fund_rate)

    health_insurance = ZERO
    if settings.enable_health_insurance:
        health_insurance = to_money(settings.health_insurance)

    return Deductions(
        social_security=social_security,
        tax_withholding=tax_withholding,
        provident_fund=provident_fund,
        health_insurance=health_insurance,
    )
