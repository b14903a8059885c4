"""
Age arithmetic shared by the student reports.

Ages are never stored; they are derived from a date of birth relative to
"today". A year is counted as 365 days, so ages drift slightly across leap
years. Reports that bucket by age truncate the fractional value.
"""

from datetime import date

DAYS_PER_YEAR = 365


def age_in_years(date_of_birth: date, today: date) -> float:
    """Fractional age: whole days elapsed divided by 365."""
    return (today - date_of_birth).days / DAYS_PER_YEAR


def years_before(day: date, years: int) -> date:
    """
    Same calendar day `years` years earlier.

    Feb 29 maps to Feb 28 when the target year is not a leap year.

    Example:
        >>> years_before(date(2024, 2, 29), 25)
        datetime.date(1999, 2, 28)
    """
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return day.replace(year=day.year - years, day=28)
