"""NCEA summary decoding.

Credit figures follow a blank-over-zero display rule: a count that is
missing, empty or zero renders as "" rather than "0".
"""

from typing import Any

from src.kamar.models import CreditRow, CreditTotals, NCEASummary
from src.kamar.schema import child, expect_root, field, has, is_zero, text

CREDIT_COLUMNS: tuple[str, ...] = (
    "NotAchieved",
    "Achieved",
    "Merit",
    "Excellence",
    "Total",
    "Attempted",
)

# (label, field under <NCEA>)
QUALIFICATIONS: tuple[tuple[str, str], ...] = (
    ("Level 1", "L1NCEA"),
    ("Level 2", "L2NCEA"),
    ("Level 3", "L3NCEA"),
    ("UE Literacy", "NCEAUELIT"),
    ("L1 Literacy", "NCEAL1LIT"),
    ("Numeracy", "NCEANUM"),
)

BLANK_ROW: CreditRow = ("", "", "", "", "", "")


def credit_cell(record: Any, column: str, path: str) -> str:
    """A credit count, or "" when missing or zero."""
    if not has(record, column):
        return ""
    value = text(record[column][0], f"{path}.{column}")
    return "" if is_zero(value) else value


def _bucket(student: dict, name: str) -> dict | None:
    if not has(student, name):
        return None
    bucket = student[name][0]
    return bucket if isinstance(bucket, dict) else {}


def credit_row(student: dict, name: str, path: str) -> CreditRow:
    bucket = _bucket(student, name)
    if bucket is None:
        return BLANK_ROW
    return tuple(credit_cell(bucket, column, f"{path}.{name}") for column in CREDIT_COLUMNS)


def _total_row(student: dict, path: str) -> CreditRow:
    row = list(credit_row(student, "CreditsTotal", path))
    # The portal shows the total Merit count only when an internal Merit count exists
    internal = _bucket(student, "CreditsInternal")
    if internal is None or not credit_cell(internal, "Merit", f"{path}.CreditsInternal"):
        row[CREDIT_COLUMNS.index("Merit")] = ""
    return tuple(row)


def totals_table(student: dict, period: str, path: str) -> str:
    """Render YearTotals or LevelTotals as HTML table rows.

    Args:
        student: The student record.
        period: "Year" or "Level".
        path: Path of the student record, for error messages.
    """
    totals = child(student, f"{period}Totals", path)
    rows_path = f"{path}.{period}Totals"
    rows = totals.get(f"{period}Total", []) if isinstance(totals, dict) else []

    cells = []
    for i, row in enumerate(rows):
        row_path = f"{rows_path}.{period}Total[{i}]"
        html = f"<td><strong>{field(row, period, row_path)}</strong></td>"
        html += "".join(
            f"<td>{credit_cell(row, column, row_path)}</td>" for column in CREDIT_COLUMNS
        )
        cells.append(html)
    return "<tr>" + "</tr><tr>".join(cells) + "</tr>"


def decode_ncea_summary(raw: dict) -> NCEASummary:
    """Decode StudentNCEASummaryResults for the first student."""
    body = expect_root(raw, "StudentNCEASummaryResults")
    path = "StudentNCEASummaryResults.Students"
    student = child(child(body, "Students", "StudentNCEASummaryResults"), "Student", path)
    path = f"{path}.Student"

    ncea = child(student, "NCEA", path)
    qualifications = [
        (label, field(ncea, name, f"{path}.NCEA")) for label, name in QUALIFICATIONS
    ]

    return NCEASummary(
        qualifications=qualifications,
        this_year=CreditTotals(
            internal=credit_row(student, "CreditsInternal", path),
            external=credit_row(student, "CreditsExternal", path),
            total=_total_row(student, path),
        ),
        year_table=totals_table(student, "Year", path),
        level_table=totals_table(student, "Level", path),
    )
