"""Accessors for the array-wrapped response shape.

Every element of a deserialized response is a list (repeated children), every
leaf value sits at index 0 of its list, attributes live under "$" and element
text under "_" when the element also carries attributes. These helpers walk
that shape and raise DecodeError with the dotted path of the first field that
does not match, so decoders never index into raw structures directly.
"""

from typing import Any

from src.kamar.errors import DecodeError

# Command name -> root elements its response may carry
RESPONSE_KINDS: dict[str, tuple[str, ...]] = {
    "Logon": ("LogonResults",),
    "GetCalendar": ("CalendarResults",),
    "GetStudentAttendance": ("StudentAttendanceResults",),
    "GetStudentAbsenceStats": ("StudentAbsenceStatsResults",),
    "GetStudentTimetable": ("StudentTimetableResults",),
    "GetTeacherTimetable": ("TeacherTimetableResults", "StudentTimetableResults"),
    "GetStudentDetails": ("StudentDetailsResults",),
    "GetStudentResults": ("StudentResultsResults",),
    "GetStudentNCEASummary": ("StudentNCEASummaryResults",),
    "SearchStudents": ("SearchStudentsResults",),
}


def expect_root(raw: Any, *kinds: str) -> dict:
    """Return the body of a deserialized response whose root is one of kinds."""
    if not isinstance(raw, dict) or len(raw) != 1:
        raise DecodeError("response must have exactly one root element")
    (root,) = raw
    if root not in kinds:
        raise DecodeError(f"unexpected response kind {root!r}, expected {' or '.join(kinds)}")
    body = raw[root]
    if not isinstance(body, dict):
        raise DecodeError("response root has no child elements", path=root)
    return body


def expect_kind(raw: Any, command: str) -> dict:
    """Check a response against the root elements its command may answer with.

    Commands missing from RESPONSE_KINDS are passed through unchecked.
    """
    kinds = RESPONSE_KINDS.get(command)
    if kinds is None:
        return raw
    expect_root(raw, *kinds)
    return raw


def has(obj: Any, key: str) -> bool:
    return isinstance(obj, dict) and bool(obj.get(key))


def children(obj: Any, key: str, path: str) -> list:
    """All repeated child elements named key."""
    where = f"{path}.{key}"
    if not isinstance(obj, dict):
        raise DecodeError("expected an element", path=path)
    value = obj.get(key)
    if not isinstance(value, list) or not value:
        raise DecodeError("missing element", path=where)
    return value


def child(obj: Any, key: str, path: str) -> Any:
    """The first child element named key."""
    return children(obj, key, path)[0]


def text(value: Any, path: str) -> str:
    """Text content of a leaf, whether plain or carrying attributes."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        content = value.get("_", "")
        if isinstance(content, str):
            return content
    raise DecodeError("expected a text value", path=path)


def field(obj: Any, key: str, path: str) -> str:
    """Text of the first child element named key."""
    return text(child(obj, key, path), f"{path}.{key}")


def optional_field(obj: Any, key: str, path: str) -> str | None:
    if not has(obj, key):
        return None
    return field(obj, key, path)


def is_zero(value: str | None) -> bool:
    """Numeric zero test where blank or missing also counts as zero."""
    if value is None or not value.strip():
        return True
    try:
        return float(value) == 0
    except ValueError:
        return False


def flatten(record: Any, path: str) -> dict[str, Any]:
    """Unwrap the single-element lists of a flat record into plain values."""
    if not isinstance(record, dict):
        raise DecodeError("expected a record", path=path)
    flat: dict[str, Any] = {}
    for key, value in record.items():
        if key == "$":
            continue
        if isinstance(value, list) and len(value) == 1:
            leaf = value[0]
            flat[key] = leaf.get("_", "") if isinstance(leaf, dict) and set(leaf) <= {"$", "_"} else leaf
        else:
            flat[key] = value
    return flat
