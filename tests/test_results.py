import pytest

from src.kamar.decoders.results import decode_results, format_credits, normalize_grade
from src.kamar.models import Grade
from samples import RESULTS_XML, parse


@pytest.mark.parametrize(
    "raw_grade, expected",
    [
        ("Excellence", Grade.EXCELLENCE),
        ("Achieved with Excellence", Grade.EXCELLENCE),
        ("Not Achieved Merit Excellence", Grade.EXCELLENCE),
        ("Merit", Grade.MERIT),
        ("Not Achieved with Merit", Grade.MERIT),
        ("Not Achieved", Grade.NOT_ACHIEVED),
        ("Achieved", Grade.ACHIEVED),
        ("Achievement", Grade.ACHIEVED),
        ("Achieve", Grade.UNKNOWN),
        ("7/7", Grade.UNKNOWN),
        ("", Grade.UNKNOWN),
    ],
)
def test_grade_normalisation_first_match(raw_grade, expected):
    assert normalize_grade(raw_grade) == expected


@pytest.mark.parametrize(
    "passed, total, expected",
    [("7", "10", "7/10"), ("0", "0", ""), ("", "", ""), ("3", "4", "3/4")],
)
def test_credits_formatting(passed, total, expected):
    assert format_credits(passed, total) == expected


def test_decodes_levels_index_aligned():
    report = decode_results(parse(RESULTS_XML))

    assert report.ncea == [True, False]
    assert [len(level) for level in report.results] == [2, 1]

    first, second = report.results[0]
    assert first.title == "Apply numeric reasoning"
    assert first.raw_grade == "Achieved with Excellence"
    assert first.grade == Grade.EXCELLENCE
    assert first.standard_id == "91026 v4"
    assert first.credits == "4/4"
    assert first.ncea_level_label == "Level 1"
    assert second.grade == Grade.NOT_ACHIEVED
    assert second.credits == ""


def test_non_ncea_level_has_blank_standard_fields():
    school_exam = decode_results(parse(RESULTS_XML)).results[1][0]
    assert school_exam.grade == Grade.UNKNOWN
    assert school_exam.standard_id == ""
    assert school_exam.ncea_level_label == ""
    assert school_exam.credits == ""


@pytest.mark.parametrize(
    "xml",
    [
        "<StudentResultsResults><ResultLevels/></StudentResultsResults>",
        "<StudentResultsResults><NumberRecords>0</NumberRecords></StudentResultsResults>",
    ],
)
def test_student_without_results(xml):
    report = decode_results(parse(xml))
    assert report.ncea == []
    assert report.results == []
