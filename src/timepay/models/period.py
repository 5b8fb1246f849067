import calendar
import re
from dataclasses import dataclass
from datetime import date

from ..exceptions import InvalidPeriod

PERIOD_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


@dataclass(frozen=True, order=True)
class PayPeriod:
    """One calendar month of payroll"""
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise InvalidPeriod(f"{self.year}-{self.month:02d}")

    @classmethod
    def parse(cls, value: str) -> "PayPeriod":
        if not isinstance(value, str):
            raise InvalidPeriod(value)
        match = PERIOD_PATTERN.match(value.strip())
        if not match:
            raise InvalidPeriod(value)
        return cls(int(match.group(1)), int(match.group(2)))

    @classmethod
    def containing(cls, day: date) -> "PayPeriod":
        return cls(day.year, day.month)

    @property
    def start(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def end(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def __str__(self):
        return f"{self.year}-{self.month:02d}"
