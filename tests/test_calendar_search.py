import pytest

from src.kamar.decoders.calendar import decode_calendar
from src.kamar.decoders.search import decode_search
from src.kamar.errors import DecodeError, RemoteError
from samples import parse

CALENDAR_XML = """
<CalendarResults>
  <ErrorCode>0</ErrorCode>
  <Days>
    <Day><Date>2024-02-05</Date><Status>School day</Status><DayTT>1</DayTT><Term>1</Term><Week>1</Week></Day>
    <Day><Date>2024-04-20</Date><Status>Holidays</Status><DayTT></DayTT><Term></Term><Week></Week></Day>
  </Days>
</CalendarResults>
"""


def test_calendar_days_keyed_by_date():
    days = decode_calendar(parse(CALENDAR_XML))
    assert list(days) == ["2024-02-05", "2024-04-20"]
    assert days["2024-02-05"].tt_day == "1"
    assert days["2024-02-05"].week == "1"
    holiday = days["2024-04-20"]
    assert holiday.status == "Holidays"
    assert (holiday.tt_day, holiday.term, holiday.week) == (None, None, None)


def test_calendar_nonzero_error_code_is_remote_error():
    raw = parse("<CalendarResults><ErrorCode>-7</ErrorCode></CalendarResults>")
    with pytest.raises(RemoteError) as excinfo:
        decode_calendar(raw)
    assert excinfo.value.code == "-7"


def test_search_results():
    raw = parse(
        "<SearchStudentsResults><NumberRecords>2</NumberRecords><Students>"
        "<Student><StudentID>111</StudentID><FirstName>Ana</FirstName><LastName>Lee</LastName>"
        "<YearLevel>11</YearLevel><House>Kauri</House></Student>"
        "<Student><StudentID>222</StudentID><FirstName>Ben</FirstName></Student>"
        "</Students></SearchStudentsResults>"
    )
    hits = decode_search(raw)
    assert [h.student_id for h in hits] == ["111", "222"]
    assert hits[0].last_name == "Lee"
    assert hits[0].year_level == "11"
    assert hits[0].model_extra == {"House": "Kauri"}
    assert hits[1].last_name is None


def test_search_without_matches_is_empty():
    assert decode_search(parse("<SearchStudentsResults><NumberRecords>0</NumberRecords></SearchStudentsResults>")) == []
    assert decode_search(parse("<SearchStudentsResults><Students/></SearchStudentsResults>")) == []


def test_search_row_without_id_is_decode_error():
    raw = parse("<SearchStudentsResults><Students><Student><FirstName>Ana</FirstName></Student></Students></SearchStudentsResults>")
    with pytest.raises(DecodeError):
        decode_search(raw)


def test_wrong_response_kind_is_decode_error():
    with pytest.raises(DecodeError, match="unexpected response kind"):
        decode_calendar(parse("<LogonResults><Success>YES</Success></LogonResults>"))
