"""School calendar decoding."""

from src.kamar.errors import RemoteError
from src.kamar.models import CalendarDay
from src.kamar.schema import child, children, expect_root, field, has, optional_field


def decode_calendar(raw: dict) -> dict[str, CalendarDay]:
    """Decode CalendarResults into days keyed by date.

    Raises:
        RemoteError: If ErrorCode is anything but 0.
    """
    body = expect_root(raw, "CalendarResults")
    path = "CalendarResults"

    code = field(body, "ErrorCode", path) if has(body, "ErrorCode") else "0"
    if code.strip() != "0":
        message = field(body, "Error", path) if has(body, "Error") else "calendar unavailable"
        raise RemoteError(message, code=code)

    days: dict[str, CalendarDay] = {}
    for i, day in enumerate(children(child(body, "Days", path), "Day", f"{path}.Days")):
        day_path = f"{path}.Days.Day[{i}]"
        days[field(day, "Date", day_path)] = CalendarDay(
            status=field(day, "Status", day_path),
            tt_day=optional_field(day, "DayTT", day_path) or None,
            term=optional_field(day, "Term", day_path) or None,
            week=optional_field(day, "Week", day_path) or None,
        )
    return days
