"""Pydantic models for KAMAR commands and decoded records.

All data structures use Pydantic v2 for validation, serialization, and type safety.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

WEEKDAYS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri")
TIMETABLE_DAYS: tuple[str, ...] = ("MO", "TU", "WE", "TH", "FR")


class Credentials(BaseModel):
    """Result of a successful logon, passed to every authenticated command."""

    username: str
    key: str
    auth_level: int


class Command(BaseModel):
    """A single portal command: name plus its extra form fields."""

    model_config = ConfigDict(frozen=True)

    name: str
    fields: Mapping[str, str] = Field(default_factory=dict)


class RemoteFault(BaseModel):
    message: str
    code: str | None = None


class Envelope(BaseModel):
    """Deserialized response split into its root key and body."""

    result_key: str
    body: Any
    error: RemoteFault | None = None


class WeekAttendance(BaseModel):
    week_start: str
    days: dict[str, str]  # Mon..Fri -> 7-char status code


class AttendanceReport(BaseModel):
    weeks: list[WeekAttendance]
    week_index: int  # number of decoded weeks; the current school week


class TimetablePeriod(BaseModel):
    subject: str
    teacher: str
    location: str


class TimetableWeek(BaseModel):
    week_number: int
    days: dict[str, list[TimetablePeriod]]  # MO..FR -> periods 1..7


class Timetable(BaseModel):
    this_week: TimetableWeek
    next_week: TimetableWeek


class Grade(str, Enum):
    EXCELLENCE = "E"
    MERIT = "M"
    NOT_ACHIEVED = "N"
    ACHIEVED = "A"
    UNKNOWN = "Unknown"


class ResultRecord(BaseModel):
    """One assessment result as published on the portal."""

    title: str
    raw_grade: str
    grade: Grade
    date_published: str
    standard_id: str = ""  # "<Number> v<Version>" for NCEA standards
    credits: str = ""  # "passed/total", blank when the standard carries no credits
    ncea_level_label: str = ""  # "Level <N>"


class ResultsReport(BaseModel):
    """Results grouped per level; ncea[i] flags whether results[i] is an NCEA level."""

    ncea: list[bool]
    results: list[list[ResultRecord]]


CreditRow = tuple[str, str, str, str, str, str]


class CreditTotals(BaseModel):
    """NotAchieved, Achieved, Merit, Excellence, Total, Attempted per bucket."""

    internal: CreditRow
    external: CreditRow
    total: CreditRow


class NCEASummary(BaseModel):
    qualifications: list[tuple[str, str]]
    this_year: CreditTotals
    year_table: str
    level_table: str


class ParentContact(BaseModel):
    title: str
    email: str
    name: str


class Household(BaseModel):
    """A custodial household: primary parent contact, phone and address."""

    parent: ParentContact
    phone: str
    address: str


class Guardian(BaseModel):
    name: str
    email: str
    phone_home: str
    phone_cell: str
    phone_work: str
    occupation: str
    work_address: str
    status: str
    notes: str


class EmergencyContact(BaseModel):
    name: str
    phone_home: str
    phone_cell: str
    phone_work: str
    notes: str


class PersonalDetails(BaseModel):
    """Student details grouped into identity, contacts and medical fields."""

    names: tuple[str, str, str]  # first (preferred), fore names, last name
    id: str
    gender: tuple[str, str]  # glyph, source text
    ethnicity: str
    birthday: tuple[str, str]  # date of birth, age
    nsn: str
    life_a: Household
    life_b: Household
    mother: Guardian
    father: Guardian
    emergency_contact: EmergencyContact
    allowed_panadol: bool
    allowed_ibuprofen: bool
    health_flag: bool
    medical: str
    reactions: str
    vaccinations: str
    special_circumstances: str
    general_notes: str
    health_notes: str


class CalendarDay(BaseModel):
    status: str
    tt_day: str | None = None
    term: str | None = None
    week: str | None = None


class StudentSearchResult(BaseModel):
    """One row of a student search; columns not modelled here are kept as extras."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    student_id: str = Field(alias="StudentID")
    first_name: str | None = Field(default=None, alias="FirstName")
    fore_names: str | None = Field(default=None, alias="ForeNames")
    last_name: str | None = Field(default=None, alias="LastName")
    year_level: str | None = Field(default=None, alias="YearLevel")
    tutor: str | None = Field(default=None, alias="Tutor")
    gender: str | None = Field(default=None, alias="Gender")
