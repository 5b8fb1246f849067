import re
from decimal import Decimal

def validate_employee_id(employee_id: str) -> bool:
    """Validate employee identifier format"""
    pattern = r'^[A-Za-z0-9][A-Za-z0-9_\-]{0,63}$'
    return bool(re.match(pattern, employee_id or ''))

def validate_rate(rate: Decimal) -> bool:
    """Validate a fractional deduction rate is within reasonable bounds"""
    return Decimal('0') <= rate <= Decimal('1')
