"""Discriminators and state enums.

Discriminator values are lookup keys only. Nothing outside a registry
branches on them.
"""

from __future__ import annotations

from enum import StrEnum


class SourceKind(StrEnum):
    """Backends a blob can be read from."""

    FILE = "file"
    FTP = "ftp"
    HTTP = "http"


class Network(StrEnum):
    """Social platforms with a user-info workflow."""

    VK = "vk"
    FACEBOOK = "facebook"
    TWITTER = "twitter"


class AdapterErrorKind(StrEnum):
    """Normalized backend failure categories."""

    UNREACHABLE = "unreachable"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"


class WorkflowStep(StrEnum):
    """The four steps of the user-info workflow, in execution order."""

    PARSE_IDENTITY = "parse_identity"
    RESOLVE_DISPLAY_NAME = "resolve_display_name"
    FETCH_RELATED = "fetch_related"
    CONVERT = "convert"


class PipelineState(StrEnum):
    """Lifecycle of a single pipeline run.

    Outcomes and errors carry only the terminal states ``COMPLETED`` and
    ``CORE_FAILED``. ``RUNNING`` is visible in pipeline log events.
    """

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CORE_FAILED = "core_failed"


class PassValue(StrEnum):
    """What post-operation handlers receive."""

    OUTPUT = "output"
    PAYLOAD = "payload"


class CompositionStrategy(StrEnum):
    """How post-operation handlers are composed around the core."""

    CHAIN = "chain"
    OBSERVER = "observer"
