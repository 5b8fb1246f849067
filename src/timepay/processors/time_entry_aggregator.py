import logging
from collections import OrderedDict
from decimal import Decimal
from typing import Dict, Iterable, List

from ..models.payroll import CompanyHours, HoursSummary, WorkTypeHours
from ..models.time_entry import UNSPECIFIED_COMPANY, TimeEntry, WorkType

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class _Totals:
    """Mutable accumulator local to a single aggregation pass"""

    def __init__(self):
        self.regular = ZERO
        self.overtime = ZERO
        self.days = set()
        self.split: Dict = OrderedDict()

    def add(self, entry: TimeEntry, key):
        self.regular += entry.regular_hours
        self.overtime += entry.overtime_hours
        if entry.total_hours > ZERO:
            self.days.add(entry.entry_date)
        self.split[key] = self.split.get(key, ZERO) + entry.total_hours


def aggregate_time_entries(entries: Iterable[TimeEntry]) -> HoursSummary:
    """
    Reduce one employee's approved entries for one month into hour totals.

    Regular hours per entry are total minus overtime. Entries that are not
    approved are ignored; anomalous entries (negative hours, overtime above
    total) are clamped rather than rejected. Days with no positive hours do
    not count as work days.
    """
    regular = ZERO
    overtime = ZERO
    work_days = set()
    clamped = 0
    companies: Dict[str, _Totals] = OrderedDict()
    work_types: Dict[WorkType, _Totals] = OrderedDict()

    for raw in entries:
        if not raw.is_approved:
            logger.debug("Skipping %s entry of %s on %s", raw.status.value, raw.employee_id, raw.entry_date)
            continue

        entry = raw
        if raw.is_anomalous:
            entry = raw.sanitized()
            clamped += 1
            logger.warning(
                "Clamped time entry of %s on %s (total=%s, overtime=%s)",
                raw.employee_id, raw.entry_date, raw.total_hours, raw.overtime_hours
            )

        company = entry.company or UNSPECIFIED_COMPANY
        work_type = WorkType.from_label(entry.work_type)

        regular += entry.regular_hours
        overtime += entry.overtime_hours
        if entry.total_hours > ZERO:
            work_days.add(entry.entry_date)

        companies.setdefault(company, _Totals()).add(entry, work_type)
        work_types.setdefault(work_type, _Totals()).add(entry, company)

    by_company: List[CompanyHours] = [
        CompanyHours(
            company=name,
            regular_hours=totals.regular,
            overtime_hours=totals.overtime,
            days=len(totals.days),
            work_types=dict(totals.split),
        )
        for name, totals in companies.items()
    ]
    by_work_type = {
        work_type: WorkTypeHours(
            work_type=work_type,
            regular_hours=totals.regular,
            overtime_hours=totals.overtime,
            companies=dict(totals.split),
        )
        for work_type, totals in work_types.items()
    }

    return HoursSummary(
        regular_hours=regular,
        overtime_hours=overtime,
        work_days=frozenset(work_days),
        by_company=tuple(by_company),
        by_work_type=by_work_type,
        clamped_entries=clamped,
    )
