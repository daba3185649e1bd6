"""
Calendar date mapping for date-anchored cycles.

Weeks are Sunday..Saturday calendar blocks. The first block is the one holding
the start date; selected weekdays earlier than the start date in that block are
dropped, every later block emits all selected weekdays.
"""

from datetime import date, datetime, timedelta
from typing import Sequence


def sunday_index(day: date) -> int:
    """Day of week with 0 = Sunday ... 6 = Saturday."""
    return day.isoweekday() % 7


def week_start(day: date) -> date:
    """The Sunday that opens the calendar week containing ``day``."""
    return day - timedelta(days=sunday_index(day))


def calculate_workout_dates(
    start_date: date | datetime,
    number_of_weeks: int,
    selected_weekdays: Sequence[int],
) -> list[date]:
    """
    Dates for every workout slot of a date-based cycle, ascending.

    Args:
        start_date: First day the cycle may use (time of day is ignored)
        number_of_weeks: Calendar weeks to cover, starting with the week of start_date
        selected_weekdays: Workout weekdays, 0 = Sunday ... 6 = Saturday

    Returns:
        One date per selected weekday per week, minus first-week days before start_date

    Example:
        >>> calculate_workout_dates(date(2025, 1, 11), 2, [1, 3, 5])
        [datetime.date(2025, 1, 13), datetime.date(2025, 1, 15), datetime.date(2025, 1, 17)]
    """
    if not selected_weekdays:
        return []

    if isinstance(start_date, datetime):
        start_date = start_date.date()

    weekdays = sorted(selected_weekdays)
    first_sunday = week_start(start_date)
    dates: list[date] = []

    for week in range(number_of_weeks):
        block_sunday = first_sunday + timedelta(weeks=week)
        for weekday in weekdays:
            candidate = block_sunday + timedelta(days=weekday)
            if week == 0 and candidate < start_date:
                continue
            dates.append(candidate)

    return dates
