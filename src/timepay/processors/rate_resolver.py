"""
Merge employment profile, advanced payroll settings and system defaults into
one EffectiveSettings value.

Precedence, field by field: PayrollSettings -> EmploymentProfile -> policy
default. Deduction toggles and rates exist only on PayrollSettings and the
policy.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from ..exceptions import ProfileNotFound
from ..models.employee import EmploymentProfile, EmploymentType
from ..models.payroll import EffectiveSettings, PayrollSettings
from ..models.policy import DEFAULT_POLICY, PayrollPolicy

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Fields shared between PayrollSettings and EmploymentProfile
_PROFILE_FIELDS = (
    'hourly_rate',
    'base_salary',
    'transport_allowance',
    'meal_allowance',
    'phone_allowance',
    'housing_allowance',
    'health_insurance',
)

# Standard packages per employment type, applied as advanced settings
POSITION_PRESETS: Dict[EmploymentType, Dict[str, Any]] = {
    EmploymentType.INTERN: {
        'hourly_rate': Decimal('300'),
        'base_salary': ZERO,
        'enable_social_security': False,
        'enable_tax_withholding': True,
        'enable_provident_fund': False,
        'social_security_rate': ZERO,
        'tax_withholding_rate': Decimal('0.01'),
        'provident_fund_rate': ZERO,
        'transport_allowance': Decimal('1000'),
        'meal_allowance': Decimal('1500'),
        'phone_allowance': ZERO,
        'housing_allowance': ZERO,
    },
    EmploymentType.PART_TIME: {
        'hourly_rate': Decimal('400'),
        'base_salary': ZERO,
        'enable_social_security': False,
        'enable_tax_withholding': True,
        'enable_provident_fund': False,
        'social_security_rate': ZERO,
        'tax_withholding_rate': Decimal('0.03'),
        'provident_fund_rate': ZERO,
        'transport_allowance': Decimal('1500'),
        'meal_allowance': Decimal('2000'),
        'phone_allowance': Decimal('300'),
        'housing_allowance': ZERO,
    },
    EmploymentType.PROBATION: {
        'hourly_rate': Decimal('450'),
        'base_salary': Decimal('18000'),
        'enable_social_security': True,
        'enable_tax_withholding': True,
        'enable_provident_fund': False,
        'social_security_rate': Decimal('0.05'),
        'tax_withholding_rate': Decimal('0.03'),
        'provident_fund_rate': ZERO,
        'transport_allowance': Decimal('1500'),
        'meal_allowance': Decimal('2000'),
        'phone_allowance': Decimal('500'),
        'housing_allowance': ZERO,
    },
    EmploymentType.FULL_TIME: {
        'hourly_rate': Decimal('600'),
        'base_salary': Decimal('25000'),
        'enable_social_security': True,
        'enable_tax_withholding': True,
        'enable_provident_fund': True,
        'social_security_rate': Decimal('0.05'),
        'tax_withholding_rate': Decimal('0.03'),
        'provident_fund_rate': Decimal('0.03'),
        'transport_allowance': Decimal('2000'),
        'meal_allowance': Decimal('3000'),
        'phone_allowance': Decimal('800'),
        'housing_allowance': ZERO,
    },
    EmploymentType.LEAD: {
        'hourly_rate': Decimal('800'),
        'base_salary': Decimal('35000'),
        'enable_social_security': True,
        'enable_tax_withholding': True,
        'enable_provident_fund': True,
        'social_security_rate': Decimal('0.05'),
        'tax_withholding_rate': Decimal('0.03'),
        'provident_fund_rate': Decimal('0.05'),
        'transport_allowance': Decimal('3000'),
        'meal_allowance': Decimal('4000'),
        'phone_allowance': Decimal('1200'),
        'housing_allowance': Decimal('2000'),
    },
}


def settings_from_preset(employee_id: str, employment_type: EmploymentType) -> PayrollSettings:
    """Build advanced settings for an employee from a position preset"""
    preset = POSITION_PRESETS[EmploymentType(employment_type)]
    return PayrollSettings(employee_id=employee_id, **preset)


def _first_defined(*values):
    for value in values:
        if value is not None:
            return value
    return None


def resolve_settings(
    profile: Optional[EmploymentProfile],
    settings: Optional[PayrollSettings] = None,
    policy: PayrollPolicy = DEFAULT_POLICY,
) -> EffectiveSettings:
    """Resolve the effective pay basis for one computation.

    Raises ProfileNotFound when ``profile`` is missing; earnings must not be
    computed for such an employee.
    """
    if profile is None:
        raise ProfileNotFound(settings.employee_id if settings else None)

    advanced = settings or PayrollSettings(employee_id=profile.employee_id)
    if settings is None:
        logger.debug("No advanced payroll settings for %s, using profile values", profile.employee_id)

    defaults = {
        'hourly_rate': policy.default_hourly_rate,
        'base_salary': ZERO,
        'transport_allowance': ZERO,
        'meal_allowance': ZERO,
        'phone_allowance': ZERO,
        'housing_allowance': ZERO,
        'health_insurance': ZERO,
    }
    merged = {
        name: Decimal(_first_defined(getattr(advanced, name), getattr(profile, name), defaults[name]))
        for name in _PROFILE_FIELDS
    }

    return EffectiveSettings(
        overtime_multiplier=Decimal(_first_defined(advanced.overtime_multiplier, policy.overtime_multiplier)),
        enable_social_security=_first_defined(advanced.enable_social_security, True),
        enable_tax_withholding=_first_defined(advanced.enable_tax_withholding, True),
        enable_provident_fund=_first_defined(advanced.enable_provident_fund, True),
        enable_health_insurance=_first_defined(advanced.enable_health_insurance, False),
        social_security_rate=Decimal(_first_defined(advanced.social_security_rate, policy.social_security_rate)),
        tax_withholding_rate=Decimal(_first_defined(advanced.tax_withholding_rate, policy.tax_withholding_rate)),
        provident_fund_rate=Decimal(_first_defined(advanced.provident_fund_rate, policy.provident_fund_rate)),
        using_advanced_settings=settings is not None,
        **merged,
    )
