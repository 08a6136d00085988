"""Timetable grid decoding.

TimetableData holds one element per school week, W1..Wn, each with one
string per weekday, D1..D5. A day string is pipe-delimited: slot 0 is a
header, slots 1-7 are periods. Each period is dash-delimited, with the
subject at field 2, the teacher at field 3 and the room at field 4:

    "1|x-1-MAT-SMI-R5|x-2-ENG-JON-|..."
"""

from src.kamar.errors import DecodeError
from src.kamar.models import TIMETABLE_DAYS, Timetable, TimetablePeriod, TimetableWeek
from src.kamar.schema import child, expect_root, field, has

DAY_SLOTS = 8  # header slot + 7 periods
PERIODS = range(1, DAY_SLOTS)


def decode_period(slot: str) -> TimetablePeriod:
    fields = slot.split("-")
    subject = fields[2] if len(fields) > 2 else ""
    teacher = fields[3] if len(fields) > 3 else ""
    location = fields[4] if len(fields) > 4 else ""
    return TimetablePeriod(subject=subject, teacher=teacher, location=location or subject)


def decode_day(day: str) -> list[TimetablePeriod]:
    """Decode one day string into its seven periods."""
    slots = day.split("|")[:DAY_SLOTS]
    slots += [""] * (DAY_SLOTS - len(slots))
    return [decode_period(slots[p]) for p in PERIODS]


def decode_week(grid: dict, week_number: int, path: str) -> TimetableWeek:
    key = f"W{week_number}"
    if not has(grid, key):
        raise DecodeError(f"no timetable for week {week_number}", path=f"{path}.{key}")
    week = child(grid, key, path)

    days = {}
    for d, name in enumerate(TIMETABLE_DAYS, start=1):
        days[name] = decode_day(field(week, f"D{d}", f"{path}.{key}"))
    return TimetableWeek(week_number=week_number, days=days)


def timetable_grid(raw: dict) -> tuple[dict, str]:
    """Locate the TimetableData block of a student or teacher timetable."""
    body = expect_root(raw, "StudentTimetableResults", "TeacherTimetableResults")
    root = next(iter(raw))
    collection, member = ("Teachers", "Teacher") if has(body, "Teachers") else ("Students", "Student")

    path = f"{root}.{collection}"
    person = child(child(body, collection, root), member, path)
    path = f"{path}.{member}"
    return child(person, "TimetableData", path), f"{path}.TimetableData"


def decode_timetable(raw: dict, week_index: int) -> Timetable:
    """Decode this week's and next week's timetable.

    Args:
        raw: Deserialized timetable response.
        week_index: Current school week, as established by decode_attendance.

    Raises:
        DecodeError: If either week, or a day within it, is missing.
    """
    grid, path = timetable_grid(raw)
    return Timetable(
        this_week=decode_week(grid, week_index, path),
        next_week=decode_week(grid, week_index + 1, path),
    )
