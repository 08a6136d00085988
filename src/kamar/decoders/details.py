"""Student personal details decoding."""

from src.kamar.models import (
    EmergencyContact,
    Guardian,
    Household,
    ParentContact,
    PersonalDetails,
)
from src.kamar.schema import child, expect_root, field

MALE_GLYPH = "유"
FEMALE_GLYPH = "웃"


def _household(student: dict, suffix: str, path: str) -> Household:
    return Household(
        parent=ParentContact(
            title=field(student, f"ParentTitle{suffix}", path),
            email=field(student, f"ParentEmail{suffix}", path),
            name=field(student, f"ParentSalutation{suffix}", path),
        ),
        phone=field(student, f"HomePhone{suffix}", path),
        address=field(student, f"HomeAddress{suffix}", path),
    )


def _guardian(student: dict, prefix: str, path: str) -> Guardian:
    return Guardian(
        name=field(student, f"{prefix}Name", path),
        email=field(student, f"{prefix}Email", path),
        phone_home=field(student, f"{prefix}PhoneHome", path),
        phone_cell=field(student, f"{prefix}PhoneCell", path),
        phone_work=field(student, f"{prefix}PhoneWork", path),
        occupation=field(student, f"{prefix}Occupation", path),
        work_address=field(student, f"{prefix}WorkAddress", path),
        status=field(student, f"{prefix}Status", path),
        notes=field(student, f"{prefix}Notes", path),
    )


def decode_details(raw: dict) -> PersonalDetails:
    """Group the flat StudentDetailsResults record into PersonalDetails."""
    body = expect_root(raw, "StudentDetailsResults")
    path = "StudentDetailsResults.Students"
    student = child(child(body, "Students", "StudentDetailsResults"), "Student", path)
    path = f"{path}.Student"

    def get(name: str) -> str:
        return field(student, name, path)

    gender = get("Gender")
    return PersonalDetails(
        names=(get("FirstName"), get("ForeNames"), get("LastName")),
        id=get("StudentID"),
        gender=(MALE_GLYPH if gender == "Male" else FEMALE_GLYPH, gender),
        ethnicity=get("Ethnicity"),
        birthday=(get("DateBirth"), get("Age")),
        nsn=get("NSN"),
        life_a=_household(student, "", path),
        life_b=_household(student, "B", path),
        mother=_guardian(student, "Mother", path),
        father=_guardian(student, "Father", path),
        emergency_contact=EmergencyContact(
            name=get("EmergencyName"),
            phone_home=get("EmergencyPhoneHome"),
            phone_cell=get("EmergencyPhoneCell"),
            phone_work=get("EmergencyPhoneWork"),
            notes=get("EmergencyNotes"),
        ),
        allowed_panadol=get("AllowedPanadol") == "Y",
        allowed_ibuprofen=get("AllowedIbuprofen") == "Y",
        health_flag=get("HealthFlag") == "Y",
        medical=get("Medical") or "No",
        reactions=get("Reactions"),
        vaccinations=get("Vaccinations"),
        special_circumstances=get("SpecialCircumstances"),
        general_notes=get("GeneralNotes"),
        health_notes=get("HealthNotes"),
    )
