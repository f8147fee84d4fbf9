"""Age calculation and WHO age brackets."""

from datetime import date

from little_ladle.domain.profiles import AgeBracket, AgeCalculation
from little_ladle.errors import InvalidDateError

MONTHS_PER_YEAR = 12
_BRACKET_BOUNDS = (
    (6, AgeBracket.UNDER_6_MONTHS),
    (12, AgeBracket.MONTHS_6_12),
    (24, AgeBracket.MONTHS_12_24),
)


def calculate_age(birth_date: date, today: date | None = None) -> AgeCalculation:
    """Return whole-month age and WHO bracket for a birth date."""
    reference = today or date.today()
    if birth_date > reference:
        raise InvalidDateError(
            f"Birth date {birth_date.isoformat()} is after {reference.isoformat()}"
        )

    months = _whole_months(birth_date, reference)
    last_month_day = _add_months(birth_date, months)
    days = (reference - last_month_day).days
    total_days = (reference - birth_date).days
    return AgeCalculation(
        total_days=total_days,
        months=months,
        days=days,
        bracket=age_bracket(months),
        display_age=_display_age(total_days, months, days),
    )


def age_bracket(months: int) -> AgeBracket:
    """Map whole months of age onto a WHO bracket."""
    for upper, bracket in _BRACKET_BOUNDS:
        if months < upper:
            return bracket
    return AgeBracket.OVER_24_MONTHS


def _whole_months(start: date, end: date) -> int:
    months = (end.year - start.year) * MONTHS_PER_YEAR + (end.month - start.month)
    if _add_months(start, months) > end:
        months -= 1
    return months


def _add_months(start: date, months: int) -> date:
    """Shift a date by whole months, clamping to the last day of short months."""
    index = start.month - 1 + months
    year = start.year + index // MONTHS_PER_YEAR
    month = index % MONTHS_PER_YEAR + 1
    day = min(start.day, _days_in_month(year, month))
    return date(year, month, day)


def _days_in_month(year: int, month: int) -> int:
    if month == MONTHS_PER_YEAR:
        return 31
    return (date(year, month + 1, 1) - date(year, month, 1)).days


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count != 1 else ''}"


def _display_age(total_days: int, months: int, days: int) -> str:
    if months < 1:
        return _plural(total_days, "day")
    if months < MONTHS_PER_YEAR:
        text = _plural(months, "month")
        return f"{text}, {_plural(days, 'day')}" if days else text
    years, remaining = divmod(months, MONTHS_PER_YEAR)
    text = _plural(years, "year")
    return f"{text}, {_plural(remaining, 'month')}" if remaining else text
