"""Configuration models for the retry controller.

Pydantic-based configuration keeps validation of caller input (the session
deadline) in one place and makes the controller easy to construct in tests.
"""

from datetime import timedelta

from pydantic import BaseModel, Field


class RestartConfig(BaseModel):
    """Configuration for one retry session.

    Attributes:
        deadline: Total time budget shared by all attempts. Accepts a
            `timedelta` or a number of seconds. Zero allows a single attempt
            that only wins if it completes without waiting.
        cancel_grace: How long a preempted operation may take to unwind after
            cancellation before the timeout is raised without it.
    """

    deadline: timedelta = Field(
        ge=timedelta(0),
        description="Upper bound on the wall-clock duration of the whole session"
    )

    cancel_grace: timedelta = Field(
        default=timedelta(milliseconds=10),
        ge=timedelta(0),
        description="Time granted to a cancelled operation to finish its cleanup"
    )

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }

    @classmethod
    def from_app_settings(cls, settings=None) -> "RestartConfig":
        """Factory method to construct config from a RestartableSettings instance.

        Args:
            settings: RestartableSettings instance; defaults to `core.settings.app_settings`,
                which is only loaded (and `.env` only read) when this path is taken

        Returns:
            RestartConfig using the default deadline from settings
        """
        if settings is None:
            from restartable.core.settings import app_settings as settings
        return cls(deadline=settings.RESTARTABLE_DEFAULT_DEADLINE)
