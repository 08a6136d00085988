"""KAMAR portal client.

Dispatches commands to a KAMAR school portal and decodes its array-wrapped
XML responses into typed records (attendance, timetable, results, NCEA
summary, personal details, calendar, student search) plus vCard export.
"""

from src.kamar.client import KamarClient
from src.kamar.dispatch import BOOTSTRAP_KEY, CommandDispatcher
from src.kamar.errors import (
    AuthenticationError,
    DecodeError,
    KamarError,
    RemoteError,
    StateError,
    TransportError,
    UnsupportedOperation,
)
from src.kamar.session import Session

__all__ = [
    "KamarClient",
    "CommandDispatcher",
    "BOOTSTRAP_KEY",
    "Session",
    "KamarError",
    "TransportError",
    "DecodeError",
    "RemoteError",
    "AuthenticationError",
    "StateError",
    "UnsupportedOperation",
]
