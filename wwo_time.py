"""Date and clock-time encodings used by the WorldWeatherOnline payloads.

The provider does not use a single time format. Calendar dates arrive as
ISO dates, astronomy and tide events as 12-hour clock strings, and hourly
samples as an integer of the form HMM or HHMM. All clock values are decoded
into a datetime.timedelta measured from local midnight.
"""

from datetime import date, datetime, timedelta

# Astronomical events that do not happen on a given day ("No moonrise").
# Negative so it can never be mistaken for an event at midnight.
NO_EVENT = timedelta(microseconds=-1)

NO_EVENT_PREFIX = "No "

DATE_FORMAT = "%Y-%m-%d"
TIME12_FORMAT = "%I:%M %p"


def parse_date(text: str) -> date:
    """Parses a provider calendar date.

        Args:
            text: A date string in YYYY-MM-DD form (e.g. '2024-03-09').

        Returns:
            The corresponding date, without any time-of-day component.

        Raises:
            ValueError: If the text is not a valid YYYY-MM-DD date.
    """
    return datetime.strptime(text.strip(), DATE_FORMAT).date()


def parse_time12(text: str) -> timedelta:
    """Parses a 12-hour local clock time into a duration since midnight.

        Args:
            text: A clock string such as '3:04 PM' or '12:00 AM', or a
                sentinel such as 'No moonrise'.

        Returns:
            The time elapsed since local midnight, or NO_EVENT for sentinels.

        Raises:
            ValueError: If the text is neither a clock time nor a sentinel.

        Example:
            >>> parse_time12("3:04 PM")
            datetime.timedelta(seconds=54240)
    """
    if text.startswith(NO_EVENT_PREFIX):
        return NO_EVENT

    parsed = datetime.strptime(text.strip(), TIME12_FORMAT)
    return timedelta(hours=parsed.hour, minutes=parsed.minute)


def parse_time_hmm(text: str) -> timedelta:
    """Parses an HMM/HHMM integer clock time into a duration since midnight.

        The value is split as hours = value // 100 and minutes = value % 100,
        so '930' is 09:30 and '0' is midnight.

        Args:
            text: The decimal digits of the encoded time.

        Returns:
            The time elapsed since local midnight.

        Raises:
            ValueError: If the text is not an unsigned decimal integer.
    """
    digits = text.strip()
    if not digits.isdigit():
        raise ValueError(f"invalid HMM time {text!r}")

    hours, minutes = divmod(int(digits), 100)
    return timedelta(hours=hours, minutes=minutes)


def format_clock(duration: timedelta) -> str:
    """Formats a duration since midnight as a 24-hour HH:MM clock string.

        NO_EVENT is rendered as '--:--'.
    """
    if duration == NO_EVENT:
        return "--:--"

    total_minutes = int(duration.total_seconds()) // 60
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours:02d}:{minutes:02d}"


def format_date(value: date) -> str:
    """Formats a date back into the provider's YYYY-MM-DD form."""
    return value.isoformat()
