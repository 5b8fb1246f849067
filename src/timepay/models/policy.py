from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Tuple


@dataclass(frozen=True)
class TaxBracket:
    """Annual income from ``lower_bound`` upward is taxed at ``rate``"""
    lower_bound: Decimal
    rate: Decimal


# Annual personal income tax table, ordered by lower bound
DEFAULT_TAX_BRACKETS: Tuple[TaxBracket, ...] = (
    TaxBracket(Decimal("0"), Decimal("0")),
    TaxBracket(Decimal("150000"), Decimal("0.05")),
    TaxBracket(Decimal("300000"), Decimal("0.10")),
    TaxBracket(Decimal("500000"), Decimal("0.15")),
    TaxBracket(Decimal("750000"), Decimal("0.20")),
    TaxBracket(Decimal("1000000"), Decimal("0.25")),
    TaxBracket(Decimal("2000000"), Decimal("0.30")),
    TaxBracket(Decimal("5000000"), Decimal("0.35")),
)


@dataclass(frozen=True)
class PayrollPolicy:
    """Versioned rate table the calculators are evaluated against.

    Passed explicitly into resolution, deduction and tax computation so a
    frozen table can be tested independently of later policy changes.
    """
    version: str = "2025.1"
    default_hourly_rate: Decimal = Decimal("500")
    overtime_multiplier: Decimal = Decimal("1.5")
    social_security_rate: Decimal = Decimal("0.05")
    social_security_cap: Decimal = Decimal("750")
    tax_withholding_rate: Decimal = Decimal("0.03")
    provident_fund_rate: Decimal = Decimal("0.03")
    months_per_year: int = 12
    tax_brackets: Tuple[TaxBracket, ...] = DEFAULT_TAX_BRACKETS


DEFAULT_POLICY = PayrollPolicy()


def build_policy(**overrides) -> PayrollPolicy:
    """Return DEFAULT_POLICY with selected fields replaced"""
    return replace(DEFAULT_POLICY, **overrides)
