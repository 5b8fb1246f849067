from decimal import Decimal
from typing import List, Tuple

from ..models.policy import DEFAULT_POLICY, PayrollPolicy, TaxBracket
from ..utils.money import to_money

ZERO = Decimal("0")


class PersonalTaxCalculator:
    """Progressive personal income tax on annualized monthly income.

    Each bracket's rate applies only to the slice of income between its lower
    bound and the next bracket's lower bound, so the result is continuous at
    every boundary and never decreases as income grows.
    """

    def __init__(self, policy: PayrollPolicy = DEFAULT_POLICY):
        self.policy = policy
        self.brackets: Tuple[TaxBracket, ...] = tuple(
            sorted(policy.tax_brackets, key=lambda b: b.lower_bound)
        )
        if not self.brackets or self.brackets[0].lower_bound != ZERO:
            raise ValueError("Tax bracket table must start at zero income")

    def bracket_breakdown(self, annual_income: Decimal) -> List[Tuple[TaxBracket, Decimal, Decimal]]:
        """(bracket, taxed slice, tax on slice) for each bracket the income reaches"""
        annual_income = Decimal(annual_income)
        rows = []

        for index, bracket in enumerate(self.brackets):
            if annual_income <= bracket.lower_bound:
                break
            upper = None
            if index + 1 < len(self.brackets):
                upper = self.brackets[index + 1].lower_bound
            top = annual_income if upper is None else min(annual_income, upper)
            taxable_slice = top - bracket.lower_bound
            rows.append((bracket, taxable_slice, taxable_slice * bracket.rate))

        return rows

    def annual_tax(self, annual_income: Decimal) -> Decimal:
        """Unrounded annual tax"""
        return sum((tax for _, _, tax in self.bracket_breakdown(annual_income)), ZERO)

    def monthly_tax(self, monthly_income: Decimal) -> Decimal:
        """Monthly share of the tax on ``monthly_income`` annualized"""
        months = self.policy.months_per_year
        annual_income = Decimal(monthly_income) * months
        return to_money(self.annual_tax(annual_income) / months)
