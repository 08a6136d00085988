"""Student search decoding."""

from pydantic import ValidationError

from src.kamar.errors import DecodeError
from src.kamar.models import StudentSearchResult
from src.kamar.schema import expect_root, flatten, has


def decode_search(raw: dict) -> list[StudentSearchResult]:
    """Decode SearchStudentsResults; no matches gives an empty list."""
    body = expect_root(raw, "SearchStudentsResults")
    if not has(body, "Students") or not has(body["Students"][0], "Student"):
        return []

    path = "SearchStudentsResults.Students.Student"
    results = []
    for i, student in enumerate(body["Students"][0]["Student"]):
        try:
            results.append(StudentSearchResult.model_validate(flatten(student, f"{path}[{i}]")))
        except ValidationError as e:
            raise DecodeError(f"invalid search result: {e.errors()[0]['msg']}", path=f"{path}[{i}]") from e
    return results
