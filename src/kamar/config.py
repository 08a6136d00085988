"""KAMAR client configuration loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_USER_AGENT = "kamar-client/0.1.0 (Python; httpx)"


class KamarConfig(BaseSettings):
    """KAMAR client configuration loaded from environment variables.

    Settings are loaded from environment variables with sensible defaults.
    For local development, create a .env file in the project root.
    """

    # Portal settings
    kamar_portal: str = Field(
        default="",
        description="Portal host name, e.g. remote.takapuna.school.nz",
    )
    kamar_year: int | None = Field(
        default=None,
        description="School year; defaults to the current calendar year",
    )
    kamar_timetable_grid: str | None = Field(
        default=None,
        description="Timetable grid id; defaults to '<year>TT'",
    )
    kamar_user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent header sent with every command",
    )

    # Contact card settings
    kamar_school_name: str = Field(
        default="Takapuna Grammar School",
        description="Organisation name written to exported vCards",
    )
    kamar_email_domain: str = Field(
        default="tgs.school.nz",
        description="Domain of student email addresses in exported vCards",
    )

    # Transport settings
    request_timeout_seconds: float = Field(
        default=30.0,
        description="HTTP timeout for a single command",
    )
    transport_retries: int = Field(
        default=0,
        description="Extra attempts the default transport makes on TransportError",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format (for production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Singleton pattern
_config: KamarConfig | None = None


def get_config() -> KamarConfig:
    """Get the KAMAR configuration singleton.

    Returns:
        KamarConfig: Configuration instance
    """
    global _config
    if _config is None:
        _config = KamarConfig()
    return _config
