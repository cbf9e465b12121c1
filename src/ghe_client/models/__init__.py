"""Pydantic models for API payloads."""

from .pre_receive import (
    EnvironmentReference,
    NewPreReceiveEnvironment,
    NewPreReceiveHook,
    PreReceiveEnvironment,
    PreReceiveEnvironmentDownload,
    PreReceiveEnvironmentDownloadState,
    PreReceiveHook,
    PreReceiveHookEnforcement,
    RepositoryReference,
    ScriptRepositoryReference,
    UpdatePreReceiveEnvironment,
    UpdatePreReceiveHook,
)

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
