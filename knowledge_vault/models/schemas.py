from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PipelineStage(str, Enum):
    """Backend processing stages a file can be pushed through.

    The value is the endpoint segment; ``label`` is the human name used in
    busy descriptions and notifications.
    """

    EXTRACT = "process-file"
    CHUNK = "create-chunks"
    EMBED = "create-embeddings"

    @property
    def label(self) -> str:
        return _STAGE_LABELS[self]


_STAGE_LABELS = {
    PipelineStage.EXTRACT: "Extraction",
    PipelineStage.CHUNK: "Chunk creation",
    PipelineStage.EMBED: "Embedding creation",
}


class FileRecord(BaseModel):
    """A document stored by the backend for the current user.

    Attributes:
        id: Server-assigned identifier (``_id`` on the wire).
        file_name: Original file name (``fileName`` on the wire).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., alias="_id", min_length=1)
    file_name: str = Field(..., alias="fileName")


class SignupRequest(BaseModel):
    """Request payload for account creation."""

    name: str
    email: str
    password: str


class LoginRequest(BaseModel):
    """Request payload for login."""

    email: str
    password: str


class LoginResponse(BaseModel):
    """Login reply carrying the bearer token."""

    token: str = Field(..., min_length=1)


class DownloadDescriptor(BaseModel):
    """Short-lived access descriptor for a stored file.

    Attributes:
        url: Signed URL to open, or None when the backend omitted it.
    """

    url: str | None = None

    @field_validator("url", mode="before")
    @classmethod
    def blank_url_is_missing(cls, v: object) -> object:
        """Treat an empty URL the same as a missing one."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class AskRequest(BaseModel):
    """Request payload for a question about one file."""

    model_config = ConfigDict(populate_by_name=True)

    question: str = Field(..., min_length=1)
    file_id: str = Field(..., alias="fileId", min_length=1)


class AskResponse(BaseModel):
    """Answer from the backend; a missing answer becomes an empty string."""

    answer: str = ""

    @field_validator("answer", mode="before")
    @classmethod
    def none_is_empty(cls, v: object) -> object:
        return "" if v is None else v
