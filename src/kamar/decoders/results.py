"""Assessment results decoding and grade normalisation."""

import re

from src.kamar.errors import DecodeError
from src.kamar.logging import get_logger
from src.kamar.models import Grade, ResultRecord, ResultsReport
from src.kamar.schema import expect_root, field, has, is_zero

logger = get_logger(__name__)

# Checked in order; the first match wins
_GRADE_PATTERNS: tuple[tuple[re.Pattern[str], Grade], ...] = (
    (re.compile("Excellence"), Grade.EXCELLENCE),
    (re.compile("Merit"), Grade.MERIT),
    (re.compile("Not"), Grade.NOT_ACHIEVED),
    (re.compile("Achieve(ment|d)"), Grade.ACHIEVED),
)


def normalize_grade(raw_grade: str) -> Grade:
    """Classify a grade text as E, M, N or A; Unknown if nothing matches."""
    for pattern, grade in _GRADE_PATTERNS:
        if pattern.search(raw_grade):
            return grade
    logger.warning("grade_unrecognised", raw_grade=raw_grade)
    return Grade.UNKNOWN


def format_credits(passed: str, total: str) -> str:
    if is_zero(total):
        return ""
    return f"{passed}/{total}"


def _ncea_level(level: dict, path: str) -> str:
    value = field(level, "NCEALevel", path) if has(level, "NCEALevel") else "0"
    return "" if is_zero(value) else value


def decode_result(result: dict, ncea_level: str, path: str) -> ResultRecord:
    raw_grade = field(result, "Grade", path)
    standard_id = ""
    if ncea_level:
        standard_id = f"{field(result, 'Number', path)} v{field(result, 'Version', path)}"

    total = field(result, "Credits", path)
    passed = "" if is_zero(total) else field(result, "CreditsPassed", path)

    return ResultRecord(
        title=field(result, "Title", path),
        raw_grade=raw_grade,
        grade=normalize_grade(raw_grade),
        date_published=field(result, "ResultPublished", path),
        standard_id=standard_id,
        credits=format_credits(passed, total),
        ncea_level_label=f"Level {ncea_level}" if ncea_level else "",
    )


def decode_results(raw: dict) -> ResultsReport:
    """Decode StudentResultsResults into per-level result lists."""
    body = expect_root(raw, "StudentResultsResults")
    path = "StudentResultsResults.ResultLevels"

    levels = []
    if has(body, "ResultLevels") and has(body["ResultLevels"][0], "ResultLevel"):
        levels = body["ResultLevels"][0]["ResultLevel"]

    ncea: list[bool] = []
    results: list[list[ResultRecord]] = []
    for h, level in enumerate(levels):
        level_path = f"{path}.ResultLevel[{h}]"
        if not isinstance(level, dict):
            raise DecodeError("expected a result level", path=level_path)
        ncea_level = _ncea_level(level, level_path)

        records = []
        if has(level, "Results") and has(level["Results"][0], "Result"):
            for i, result in enumerate(level["Results"][0]["Result"]):
                records.append(
                    decode_result(result, ncea_level, f"{level_path}.Results.Result[{i}]")
                )
        ncea.append(bool(ncea_level))
        results.append(records)

    return ResultsReport(ncea=ncea, results=results)
