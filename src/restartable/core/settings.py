from pydantic import field_validator
from pydantic_settings import BaseSettings


# using pydantic_settings to manage environment variables
# and do automatic type casting in a central place
class RestartableSettings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }
    # For configure_logging(app_settings.RESTARTABLE_LOG_LEVEL) in applications
    RESTARTABLE_LOG_LEVEL: str = "INFO"
    # Seconds; used by RestartConfig.from_app_settings
    RESTARTABLE_DEFAULT_DEADLINE: float = 5.0

    @field_validator("RESTARTABLE_DEFAULT_DEADLINE")
    def ensure_non_negative(cls, value: float) -> float:
        """A session deadline cannot be negative."""
        if value < 0:
            raise ValueError("RESTARTABLE_DEFAULT_DEADLINE must be >= 0")
        return value


# Loaded on first import; the controller never imports this module
app_settings = RestartableSettings()
