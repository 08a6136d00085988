"""vCard 4.0 export of decoded student details."""

from datetime import datetime, timezone

from src.kamar.models import Credentials, PersonalDetails
from src.kamar.session import Session


def escape_line_breaks(value: str) -> str:
    """Replace line breaks with the literal two-character sequence \\n."""
    return value.replace("\r\n", "\\n").replace("\n", "\\n")


def revision_timestamp(moment: datetime) -> str:
    """UTC timestamp with millisecond precision, e.g. 2024-05-01T09:30:00.000Z."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def photo_url(session: Session, credentials: Credentials, student_id: str) -> str:
    return f"https://{session.portal}/api/img.php?Key={credentials.key}&Stuid={student_id}"


def make_vcard(
    session: Session,
    credentials: Credentials,
    details: PersonalDetails,
    now: datetime | None = None,
) -> str:
    """Build a vCard for a student from already-fetched details.

    Args:
        session: Session supplying the portal, school name and email domain.
        credentials: Credentials whose key authorises the photo URL.
        details: Output of decode_details.
        now: Revision timestamp; defaults to the current UTC time.
    """
    first, fore, last = details.names
    address = escape_line_breaks(details.life_a.address)
    revision = revision_timestamp(now or datetime.now(timezone.utc))
    emergency = details.emergency_contact

    return "\n".join(
        [
            "BEGIN:VCARD",
            "VERSION:4.0",
            f"N:{last};{fore};;;",
            f"NICKNAME:{first}",
            f"FN:{fore}",
            f"ORG:{session.school_name} Student #{details.id}",
            f"GENDER:{details.gender[1]}",
            f"TITLE:{details.ethnicity}",
            f"PHOTO;MEDIATYPE=image/jpeg:{photo_url(session, credentials, details.id)}",
            f"TEL;TYPE=home,voice;home=uri:{details.life_a.phone}",
            f'ADR;TYPE=home;home="{address}":;;{address}',
            f"EMAIL:{details.id}@{session.email_domain}",
            f"REV:{revision}",
            f"BDAY:{details.birthday[0]}",
            f"NOTE:Emergency Contact: {emergency.name} ({emergency.phone_cell})",
            "END:VCARD",
        ]
    )
