"""Client-side state slots.

Each model here is owned by exactly one component and only mutated through
that component's operations.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class AuthMode(str, Enum):
    """Which form the unauthenticated view shows."""

    LOGIN = "login"
    SIGNUP = "signup"


class NotificationKind(str, Enum):
    """Severity of a toast."""

    SUCCESS = "success"
    ERROR = "error"


class FailureKind(str, Enum):
    """Why an operation did not succeed."""

    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    BACKEND = "backend"
    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    RESPONSE_SHAPE = "response_shape"
    STORAGE = "storage"
    BUSY = "busy"


class Session(BaseModel):
    """Authentication state, also the persisted file format.

    Attributes:
        token: Bearer token, None while logged out.
        name: Display name remembered from signup.
    """

    token: str | None = None
    name: str | None = None


class Notification(BaseModel):
    """The single toast slot."""

    visible: bool = False
    kind: NotificationKind = NotificationKind.SUCCESS
    message: str = ""


class OperationState(BaseModel):
    """The single busy-indicator slot."""

    busy: bool = False
    description: str | None = None


class QAState(BaseModel):
    """Question being composed and the last answer received."""

    question: str = ""
    answer: str | None = None


class StagedFile(BaseModel):
    """A local file picked for the next upload.

    Attributes:
        filename: Name sent in the multipart part.
        content: Raw file bytes.
        content_type: MIME type of the part.
    """

    filename: str = Field(..., min_length=1)
    content: bytes
    content_type: str = "application/octet-stream"


class Outcome(BaseModel):
    """Result of an operation run through the request orchestrator.

    Attributes:
        ok: Whether the call and its continuation succeeded.
        failure: Failure category when ``ok`` is False.
        value: Whatever the backend call returned on success.
    """

    ok: bool
    failure: FailureKind | None = None
    value: Any = None

    @classmethod
    def success(cls, value: Any = None) -> "Outcome":
        return cls(ok=True, value=value)

    @classmethod
    def failed(cls, failure: FailureKind) -> "Outcome":
        return cls(ok=False, failure=failure)
