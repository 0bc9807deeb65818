"""
Configuration Schemas.

Pydantic models defining the expected structure of the YAML settings file.
Used by AppConfig to validate configuration at load time. If the file has
unknown keys or wrong types, a clear error is raised at startup instead of
a cryptic KeyError deep in a command.

Every field has a default so an absent file (or a partial one) is valid:
    ClientSchema   → client:
    LoggingSchema  → logging:
"""

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# client:
# =============================================================================


class ClientSchema(_StrictBase):
    timeout: float = Field(default=30.0, gt=0)
    user_agent: str | None = None


# =============================================================================
# logging:
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool = True


class FileHandlerSchema(_StrictBase):
    enabled: bool = False
    path: str = "~/.rpaasv2/rpaasv2.jsonl"
    max_bytes: int = 10485760
    backup_count: int = 5


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema = Field(default_factory=ConsoleHandlerSchema)
    file: FileHandlerSchema = Field(default_factory=FileHandlerSchema)


class LoggingSchema(_StrictBase):
    level: str = "WARNING"
    format: str = Field(default="console", pattern="^(console|json)$")
    handlers: HandlersSchema = Field(default_factory=HandlersSchema)


class ConfigSchema(_StrictBase):
    client: ClientSchema = Field(default_factory=ClientSchema)
    logging: LoggingSchema = Field(default_factory=LoggingSchema)
