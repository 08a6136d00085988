"""Per-user portal session: configuration plus the current week index.

A Session carries the portal coordinates every command needs and one piece
of sequencing state, week_index, which the attendance call establishes and
the timetable call consumes. A Session is not safe for overlapping use by
concurrent tasks; give each concurrent user its own instance.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.kamar.config import DEFAULT_USER_AGENT, KamarConfig
from src.kamar.errors import StateError
from src.kamar.logging import get_logger

logger = get_logger(__name__)


class Session(BaseModel):
    """Portal coordinates and call-sequencing state for one user."""

    model_config = ConfigDict(validate_assignment=True)

    portal: str = Field(min_length=1)
    year: int = Field(default_factory=lambda: date.today().year)
    timetable_grid: str = ""
    user_agent: str = DEFAULT_USER_AGENT
    school_name: str = "Takapuna Grammar School"
    email_domain: str = "tgs.school.nz"
    week_index: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _default_grid(self) -> "Session":
        if not self.timetable_grid:
            # Assigning here would re-run validation; write through __dict__.
            self.__dict__["timetable_grid"] = f"{self.year}TT"
        return self

    @classmethod
    def from_config(cls, config: KamarConfig) -> "Session":
        """Build a session from environment configuration.

        Raises:
            ValueError: If no portal is configured.
        """
        if not config.kamar_portal:
            raise ValueError(
                "KAMAR_PORTAL must be set, e.g. remote.takapuna.school.nz"
            )
        values = {
            "portal": config.kamar_portal,
            "user_agent": config.kamar_user_agent,
            "school_name": config.kamar_school_name,
            "email_domain": config.kamar_email_domain,
        }
        if config.kamar_year is not None:
            values["year"] = config.kamar_year
        if config.kamar_timetable_grid:
            values["timetable_grid"] = config.kamar_timetable_grid
        return cls(**values)

    @property
    def api_url(self) -> str:
        return f"https://{self.portal}/api/api.php"

    def record_week_index(self, week_index: int) -> None:
        """Store the week index established by an attendance call."""
        self.week_index = week_index
        logger.debug("week_index_recorded", week_index=week_index)

    def require_week_index(self) -> int:
        """Return the week index, failing if attendance has not been fetched.

        Raises:
            StateError: If no attendance call has established the week index.
        """
        if self.week_index is None:
            raise StateError(
                "attendance must be fetched before the timetable "
                "so the current week is known"
            )
        return self.week_index
