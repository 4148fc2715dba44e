"""Pydantic models for backend payloads and client state.

Provides type safety and validation at the HTTP boundary and a single
definition of every piece of observable client state.

Models:
    - FileRecord: A document owned by the user
    - LoginResponse, DownloadDescriptor, AskResponse: Backend replies
    - AskRequest, SignupRequest, LoginRequest: Backend request bodies
    - Session, Notification, OperationState, QAState: Client state slots
    - StagedFile: The file picked for the next upload
    - Outcome: Result of an orchestrated backend operation
"""

from knowledge_vault.models.schemas import (
    AskRequest,
    AskResponse,
    DownloadDescriptor,
    FileRecord,
    LoginRequest,
    LoginResponse,
    PipelineStage,
    SignupRequest,
)
from knowledge_vault.models.state import (
    AuthMode,
    FailureKind,
    Notification,
    NotificationKind,
    OperationState,
    Outcome,
    QAState,
    Session,
    StagedFile,
)

__all__ = [
    "AskRequest",
    "AskResponse",
    "AuthMode",
    "DownloadDescriptor",
    "FailureKind",
    "FileRecord",
    "LoginRequest",
    "LoginResponse",
    "Notification",
    "NotificationKind",
    "OperationState",
    "Outcome",
    "PipelineStage",
    "QAState",
    "Session",
    "SignupRequest",
    "StagedFile",
]
