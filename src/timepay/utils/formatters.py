from decimal import Decimal

from ..models.period import PayPeriod
from .money import to_money


def format_amount(amount: Decimal) -> str:
    """Plain two-decimal amount, no grouping (machine readable)"""
    return f"{to_money(amount):.2f}"


def format_currency(amount: Decimal, symbol: str = "฿") -> str:
    """Format currency amount for display"""
    return f"{to_money(amount):,.2f} {symbol}"


def format_hours(hours: Decimal) -> str:
    """Format hours with two decimals"""
    return f"{Decimal(hours):.2f}"


def format_period_label(period: PayPeriod) -> str:
    """Format pay period as e.g. 'August 2025'"""
    return period.start.strftime("%B %Y")
