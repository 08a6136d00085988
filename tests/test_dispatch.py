import pytest
from structlog.testing import capture_logs

from src.kamar.dispatch import BOOTSTRAP_KEY, CommandDispatcher, build_form, make_command
from src.kamar.errors import DecodeError, RemoteError, TransportError
from src.kamar.logging import REDACTED
from samples import LOGON_XML, FakeTransport


def test_build_form_always_has_command_and_key():
    form = build_form(make_command("GetStudentResults", {"StudentID": 12345}), "k1")
    assert form == {"Command": "GetStudentResults", "Key": "k1", "StudentID": "12345"}


def test_command_is_immutable():
    command = make_command("GetCalendar", {"Year": 2024})
    with pytest.raises(Exception):
        command.name = "Logon"


@pytest.mark.asyncio
async def test_dispatch_returns_root_unchanged(session):
    transport = FakeTransport({"Logon": LOGON_XML})
    dispatcher = CommandDispatcher(session, transport)

    raw = await dispatcher.dispatch(make_command("Logon", {"Username": "u", "Password": "p"}))

    assert raw["LogonResults"]["Key"] == ["abc123key"]
    url, form = transport.calls[0]
    assert url == "https://school.example/api/api.php"
    assert form["Key"] == BOOTSTRAP_KEY
    assert form["Username"] == "u"


@pytest.mark.asyncio
async def test_transport_failure_surfaces_without_retry(session):
    transport = FakeTransport({"GetCalendar": TransportError("connection reset")})
    dispatcher = CommandDispatcher(session, transport)

    with pytest.raises(TransportError):
        await dispatcher.dispatch(make_command("GetCalendar"))
    assert len(transport.calls) == 1


@pytest.mark.asyncio
async def test_unparseable_body_is_decode_error(session):
    dispatcher = CommandDispatcher(session, FakeTransport({"GetCalendar": "<html><body>oops"}))
    with pytest.raises(DecodeError):
        await dispatcher.dispatch(make_command("GetCalendar"))


@pytest.mark.asyncio
async def test_remote_error_carries_message_and_code(session):
    body = "<StudentResultsResults><Error>Key expired</Error><ErrorCode>-1</ErrorCode></StudentResultsResults>"
    dispatcher = CommandDispatcher(session, FakeTransport({"GetStudentResults": body}))

    with pytest.raises(RemoteError) as excinfo:
        await dispatcher.dispatch(make_command("GetStudentResults"), key="stale")
    assert excinfo.value.message == "Key expired"
    assert excinfo.value.code == "-1"


@pytest.mark.asyncio
async def test_injected_deserializer_is_used(session):
    dispatcher = CommandDispatcher(
        session,
        FakeTransport({"Ping": "ignored"}),
        deserializer=lambda body: {"PingResults": {"Ok": ["1"]}},
    )
    assert await dispatcher.dispatch(make_command("Ping")) == {"PingResults": {"Ok": ["1"]}}


@pytest.mark.asyncio
async def test_logged_form_hides_key_and_password(session):
    dispatcher = CommandDispatcher(session, FakeTransport({"Logon": LOGON_XML}))

    with capture_logs() as logs:
        await dispatcher.dispatch(make_command("Logon", {"Username": "u", "Password": "hunter2"}))

    sent = next(entry for entry in logs if entry["event"] == "kamar_command_sent")
    assert sent["form"] == {"Command": "Logon", "Key": REDACTED, "Username": "u", "Password": REDACTED}
