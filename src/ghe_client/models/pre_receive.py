"""Pydantic models for the pre-receive hook and environment admin APIs.

Response models are frozen and ignore unknown fields so new server fields
never break decoding. Request models forbid unknown fields and are serialized
with None values dropped, which gives PATCH its partial-update semantics.

Reference: https://docs.github.com/en/enterprise-server/rest/enterprise-admin/pre-receive-hooks
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "EnvironmentReference",
    "NewPreReceiveEnvironment",
    "NewPreReceiveHook",
    "PreReceiveEnvironment",
    "PreReceiveEnvironmentDownload",
    "PreReceiveEnvironmentDownloadState",
    "PreReceiveHook",
    "PreReceiveHookEnforcement",
    "RepositoryReference",
    "ScriptRepositoryReference",
    "UpdatePreReceiveEnvironment",
    "UpdatePreReceiveHook",
]


class PreReceiveHookEnforcement(str, Enum):
    """Whether a hook runs, and whether failures reject the push.

    Note: Uses (str, Enum) so values compare equal to their wire strings.
    """

    ENABLED = "enabled"
    DISABLED = "disabled"
    TESTING = "testing"  # runs, reports, never rejects


class PreReceiveEnvironmentDownloadState(str, Enum):
    """State of the latest environment tarball download."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    SUCCESS = "success"
    FAILED = "failed"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> "PreReceiveEnvironmentDownloadState":
        # Newer servers may report states this client does not know yet
        return cls.UNKNOWN


class _ResponseModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class _RequestModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


# =============================================================================
# Response models
# =============================================================================


class RepositoryReference(_ResponseModel):
    """Repository a hook script lives in."""

    id: int | None = None
    full_name: str
    url: str | None = None
    html_url: str | None = None


class PreReceiveEnvironmentDownload(_ResponseModel):
    """Latest download of an environment's image tarball."""

    url: str | None = None
    state: PreReceiveEnvironmentDownloadState = PreReceiveEnvironmentDownloadState.NOT_STARTED
    message: str | None = None
    downloaded_at: datetime | None = None

    def __str__(self) -> str:
        return f"State: {self.state.value} Message: {self.message}"


class PreReceiveEnvironment(_ResponseModel):
    """Execution environment (chroot image) that pre-receive hooks run in."""

    id: int
    name: str
    image_url: str | None = None
    url: str | None = None
    html_url: str | None = None
    default_environment: bool = False
    created_at: datetime | None = None
    hooks_count: int | None = None
    download: PreReceiveEnvironmentDownload | None = None


class PreReceiveHook(_ResponseModel):
    """A pre-receive hook as returned by the API."""

    id: int
    name: str
    enforcement: PreReceiveHookEnforcement | None = None
    script: str | None = None
    script_repository: RepositoryReference | None = None
    environment: PreReceiveEnvironment | None = None
    allow_downstream_configuration: bool | None = None


# =============================================================================
# Request models
# =============================================================================


class ScriptRepositoryReference(_RequestModel):
    full_name: str = Field(..., min_length=3, pattern=r"^[^/\s]+/[^/\s]+$")


class EnvironmentReference(_RequestModel):
    id: int


def _coerce_repository(v: Any) -> Any:
    if isinstance(v, str):
        return {"full_name": v}
    return v


def _coerce_environment(v: Any) -> Any:
    if isinstance(v, int) and not isinstance(v, bool):
        return {"id": v}
    return v


class NewPreReceiveHook(_RequestModel):
    """Payload for creating a pre-receive hook.

    script_repository accepts "owner/repo" and environment accepts a bare
    environment id; both are sent in the nested wire shape.

    Example:
        >>> NewPreReceiveHook(
        ...     name="check-commits",
        ...     script_repository="octo-org/hooks",
        ...     script="scripts/check_commits.sh",
        ...     environment=1,
        ...     enforcement=PreReceiveHookEnforcement.TESTING,
        ... )
    """

    name: str = Field(..., min_length=1)
    script: str = Field(..., min_length=1)
    script_repository: ScriptRepositoryReference
    environment: EnvironmentReference
    enforcement: PreReceiveHookEnforcement | None = None
    allow_downstream_configuration: bool | None = None

    @field_validator("script_repository", mode="before")
    @classmethod
    def parse_repository(cls, v: Any) -> Any:
        return _coerce_repository(v)

    @field_validator("environment", mode="before")
    @classmethod
    def parse_environment(cls, v: Any) -> Any:
        return _coerce_environment(v)


class UpdatePreReceiveHook(_RequestModel):
    """Partial update for a pre-receive hook; unset fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1)
    script: str | None = None
    script_repository: ScriptRepositoryReference | None = None
    environment: EnvironmentReference | None = None
    enforcement: PreReceiveHookEnforcement | None = None
    allow_downstream_configuration: bool | None = None

    @field_validator("script_repository", mode="before")
    @classmethod
    def parse_repository(cls, v: Any) -> Any:
        return _coerce_repository(v)

    @field_validator("environment", mode="before")
    @classmethod
    def parse_environment(cls, v: Any) -> Any:
        return _coerce_environment(v)


class NewPreReceiveEnvironment(_RequestModel):
    """Payload for creating a pre-receive environment."""

    name: str = Field(..., min_length=1)
    image_url: str = Field(..., min_length=1)


class UpdatePreReceiveEnvironment(_RequestModel):
    """Partial update for a pre-receive environment."""

    name: str | None = Field(default=None, min_length=1)
    image_url: str | None = Field(default=None, min_length=1)
