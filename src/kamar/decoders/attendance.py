"""Attendance and absence statistics decoding.

Attendance comes back one <Week> per school week so far, each with five
<Day> elements whose text is a per-period status string. The number of weeks
is the current week index, which the timetable call needs.
"""

from src.kamar.errors import DecodeError, StateError
from src.kamar.models import WEEKDAYS, AttendanceReport, WeekAttendance
from src.kamar.schema import child, children, expect_root, field, has, is_zero, text

PERIOD_COUNT = 7
MISSING_DAY = "-" * PERIOD_COUNT


def _day_code(day: object, path: str) -> str:
    # A <Day> without text deserializes to "" or to a dict without "_"
    code = text(day, path) or MISSING_DAY
    return code[:PERIOD_COUNT].ljust(PERIOD_COUNT, "-")


def decode_attendance(raw: dict) -> AttendanceReport:
    """Decode StudentAttendanceResults into per-week day codes.

    Raises:
        StateError: If the school has no attendance weeks set up. The error
            carries week_index=1, the week callers should assume.
    """
    body = expect_root(raw, "StudentAttendanceResults")
    path = "StudentAttendanceResults"

    if not has(body, "Weeks") or not has(body["Weeks"][0], "Week"):
        raise StateError("no attendance configured, assuming week 1", week_index=1)

    weeks: list[WeekAttendance] = []
    for i, week in enumerate(children(child(body, "Weeks", path), "Week", f"{path}.Weeks")):
        week_path = f"{path}.Weeks.Week[{i}]"
        days = []
        if has(week, "Days") and has(week["Days"][0], "Day"):
            days = week["Days"][0]["Day"]

        codes = {}
        for j, name in enumerate(WEEKDAYS):
            if j < len(days):
                codes[name] = _day_code(days[j], f"{week_path}.Days.Day[{j}]")
            else:
                codes[name] = MISSING_DAY
        weeks.append(
            WeekAttendance(week_start=field(week, "WeekStart", week_path), days=codes)
        )

    return AttendanceReport(weeks=weeks, week_index=len(weeks))


def decode_absence_stats(raw: dict) -> dict:
    """Return the first student's absence statistics record as delivered.

    Raises:
        DecodeError: If the response holds no records.
    """
    body = expect_root(raw, "StudentAbsenceStatsResults")
    path = "StudentAbsenceStatsResults"

    count = field(body, "NumberRecords", path) if has(body, "NumberRecords") else None
    if is_zero(count):
        raise DecodeError("no absence records", path=f"{path}.NumberRecords")

    students = child(body, "Students", path)
    return child(students, "Student", f"{path}.Students")
