"""KamarClient - one method per portal command.

Each method builds its command, dispatches it and runs the matching decoder.
The client is also where week_index is threaded through the session: the
attendance call records it and the timetable call requires it.
"""

from typing import Any

from src.kamar.config import KamarConfig, get_config
from src.kamar.decoders.attendance import decode_absence_stats, decode_attendance
from src.kamar.decoders.auth import decode_logon
from src.kamar.decoders.calendar import decode_calendar
from src.kamar.decoders.details import decode_details
from src.kamar.decoders.ncea import decode_ncea_summary
from src.kamar.decoders.results import decode_results
from src.kamar.decoders.search import decode_search
from src.kamar.decoders.timetable import decode_timetable
from src.kamar.dispatch import BOOTSTRAP_KEY, CommandDispatcher, make_command
from src.kamar.errors import (
    AuthenticationError,
    RemoteError,
    StateError,
    UnsupportedOperation,
)
from src.kamar.logging import get_logger
from src.kamar.models import (
    AttendanceReport,
    CalendarDay,
    Credentials,
    NCEASummary,
    PersonalDetails,
    ResultsReport,
    StudentSearchResult,
    Timetable,
)
from src.kamar.schema import expect_kind
from src.kamar.session import Session
from src.kamar.transport import Deserialize, HttpxTransport, SendRequest, deserialize
from src.kamar.vcard import make_vcard

logger = get_logger(__name__)

# LogonLevel reported for teaching staff
TEACHER_AUTH_LEVEL = 10


class KamarClient:
    """Typed access to a KAMAR portal for one session.

    Usage:
        async with KamarClient(Session(portal="remote.school.nz")) as kamar:
            creds = await kamar.authenticate("12345", "hunter2")
            await kamar.get_attendance(creds)
            timetable = await kamar.get_timetable(creds)
    """

    def __init__(
        self,
        session: Session,
        send_request: SendRequest | None = None,
        deserializer: Deserialize = deserialize,
        config: KamarConfig | None = None,
    ) -> None:
        self.session = session
        self._transport: HttpxTransport | None = None
        if send_request is None:
            config = config or get_config()
            self._transport = HttpxTransport(
                session.user_agent,
                timeout=config.request_timeout_seconds,
                retries=config.transport_retries,
            )
            send_request = self._transport
        self.dispatcher = CommandDispatcher(session, send_request, deserializer)

    async def __aenter__(self) -> "KamarClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._transport is not None:
            await self._transport.aclose()

    async def _send(self, name: str, key: str, **fields: Any) -> dict:
        raw = await self.dispatcher.dispatch(make_command(name, fields), key=key)
        return expect_kind(raw, name)

    async def authenticate(self, username: str, password: str) -> Credentials:
        """Log on and return the key used by every other command."""
        try:
            raw = await self._send(
                "Logon", BOOTSTRAP_KEY, Username=username, Password=password
            )
        except RemoteError as e:
            raise AuthenticationError(e.message, code=e.code) from e
        credentials = decode_logon(raw, username)
        logger.info(
            "kamar_authenticated", username=username, auth_level=credentials.auth_level
        )
        return credentials

    async def get_attendance(self, credentials: Credentials) -> AttendanceReport:
        """Fetch attendance and record the current week index on the session.

        Raises:
            StateError: If no attendance is configured; the session is set to
                week 1 before the error propagates.
        """
        raw = await self._send(
            "GetStudentAttendance",
            credentials.key,
            StudentID=credentials.username,
            Grid=self.session.timetable_grid,
        )
        try:
            report = decode_attendance(raw)
        except StateError as e:
            if e.week_index is not None:
                self.session.record_week_index(e.week_index)
                logger.warning("attendance_missing", assumed_week=e.week_index)
            raise
        self.session.record_week_index(report.week_index)
        return report

    async def get_absence_stats(self, credentials: Credentials) -> dict:
        raw = await self._send(
            "GetStudentAbsenceStats",
            credentials.key,
            StudentID=credentials.username,
            Grid=self.session.year,
        )
        return decode_absence_stats(raw)

    async def get_timetable(self, credentials: Credentials) -> Timetable:
        """Fetch this week's and next week's timetable.

        Teachers (auth level 10) get their teaching timetable instead of a
        student timetable.

        Raises:
            StateError: If get_attendance has not established the week index.
        """
        week_index = self.session.require_week_index()
        if credentials.auth_level == TEACHER_AUTH_LEVEL:
            raw = await self._send(
                "GetTeacherTimetable",
                credentials.key,
                Grid=self.session.timetable_grid,
                Tchr=credentials.username,
            )
        else:
            raw = await self._send(
                "GetStudentTimetable",
                credentials.key,
                StudentID=credentials.username,
                Grid=self.session.timetable_grid,
            )
        return decode_timetable(raw, week_index)

    async def get_calendar(self) -> dict[str, CalendarDay]:
        """Fetch the school calendar for the session year. No logon needed."""
        raw = await self._send("GetCalendar", BOOTSTRAP_KEY, Year=self.session.year)
        return decode_calendar(raw)

    async def get_details(self, credentials: Credentials) -> PersonalDetails:
        raw = await self._send(
            "GetStudentDetails",
            credentials.key,
            StudentID=credentials.username,
            PastoralNotes="",
        )
        return decode_details(raw)

    async def get_results(self, credentials: Credentials) -> ResultsReport:
        raw = await self._send(
            "GetStudentResults", credentials.key, StudentID=credentials.username
        )
        return decode_results(raw)

    async def get_ncea_summary(self, credentials: Credentials) -> NCEASummary:
        raw = await self._send(
            "GetStudentNCEASummary", credentials.key, StudentID=credentials.username
        )
        return decode_ncea_summary(raw)

    async def search_students(
        self, credentials: Credentials, query: str
    ) -> list[StudentSearchResult]:
        """Search the student database. Requires a staff key."""
        raw = await self._send("SearchStudents", credentials.key, Criteria=query)
        return decode_search(raw)

    async def send_command(self, name: str, key: str, **fields: Any) -> dict:
        """Send any command and return the undecoded response root."""
        return await self._send(name, key, **fields)

    def get_file(self, *args: Any, **kwargs: Any) -> None:
        """Withdrawn: the portal no longer accepts the FileName attribute.

        Raises:
            UnsupportedOperation: Always. Use send_command instead.
        """
        raise UnsupportedOperation(
            "the portal no longer supports the FileName attribute; "
            "use send_command instead"
        )

    def make_vcard(self, credentials: Credentials, details: PersonalDetails) -> str:
        """Export already-fetched details as a vCard."""
        return make_vcard(self.session, credentials, details)
