import pytest

from src.kamar.decoders.timetable import decode_day, decode_period, decode_timetable
from src.kamar.errors import DecodeError
from samples import parse, timetable_xml


def test_period_fields():
    period = decode_period("A-B-Math-Smith-Room5")
    assert (period.subject, period.teacher, period.location) == ("Math", "Smith", "Room5")


def test_location_falls_back_to_subject():
    period = decode_period("A-B-Math-Smith-")
    assert period.location == "Math"
    assert decode_period("A-B-Math-Smith").location == "Math"


def test_empty_slot_is_blank_period():
    period = decode_period("")
    assert (period.subject, period.teacher, period.location) == ("", "", "")


def test_day_string_within_pipes():
    periods = decode_day("hdr|A-B-Math-Smith-Room5|A-B-Art-Jones-")
    assert len(periods) == 7
    assert periods[0].subject == "Math"
    assert periods[1].location == "Art"
    assert all(p.subject == "" for p in periods[2:])


def test_day_string_truncated_to_seven_periods():
    day = "|".join(["hdr"] + [f"x-y-S{p}-T{p}-R{p}" for p in range(1, 11)])
    periods = decode_day(day)
    assert [p.subject for p in periods] == [f"S{p}" for p in range(1, 8)]


def test_decodes_this_and_next_week():
    timetable = decode_timetable(parse(timetable_xml(range(1, 6))), week_index=3)

    assert timetable.this_week.week_number == 3
    assert timetable.next_week.week_number == 4
    assert list(timetable.this_week.days) == ["MO", "TU", "WE", "TH", "FR"]
    monday = timetable.this_week.days["MO"]
    assert len(monday) == 7
    assert monday[0].subject == "W3D1P1"
    assert monday[0].teacher == "SMI"
    assert monday[0].location == "R5"
    assert timetable.next_week.days["FR"][6].subject == "W4D5P7"


def test_teacher_timetable_shape():
    raw = parse(timetable_xml(range(2, 4), root="TeacherTimetableResults", member="Teacher"))
    timetable = decode_timetable(raw, week_index=2)
    assert timetable.this_week.days["WE"][2].subject == "W2D3P3"


def test_missing_next_week_is_decode_error():
    with pytest.raises(DecodeError) as excinfo:
        decode_timetable(parse(timetable_xml(range(1, 4))), week_index=3)
    assert excinfo.value.path.endswith("TimetableData.W4")


def test_missing_day_is_decode_error():
    raw = parse(
        "<StudentTimetableResults><Students><Student><TimetableData>"
        "<W1><D1>h|a-b-X-Y-Z</D1></W1><W2><D1>h</D1></W2>"
        "</TimetableData></Student></Students></StudentTimetableResults>"
    )
    with pytest.raises(DecodeError, match="D2"):
        decode_timetable(raw, week_index=1)
