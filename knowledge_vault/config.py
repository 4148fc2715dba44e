"""Client configuration with environment variable loading.

Pydantic-based configuration for the knowledge vault client.
Values come from the environment (or a .env file) unless passed explicitly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


def _state_file() -> Path:
    configured = os.getenv("VAULT_STATE_FILE")
    if configured:
        return Path(configured)
    return Path.cwd() / "data" / "session.json"


class ClientConfig(BaseModel):
    """Configuration for the knowledge vault client.

    Attributes:
        api_base_url: Base URL of the document backend.
        state_file: Session file used when no browser storage is supplied.
        toast_seconds: How long a notification stays visible.
        request_timeout: Per-request timeout in seconds (None waits forever).
        serialize_operations: Reject a call whose operation key is already running.
    """

    # Defaults come from the environment, so validators run on them as well
    model_config = ConfigDict(validate_default=True)

    api_base_url: str = Field(
        default_factory=lambda: os.getenv(
            "VAULT_API_URL", os.getenv("API_BASE_URL", "http://localhost:5000")
        ),
        description="Backend base URL",
    )
    state_file: Path = Field(
        default_factory=_state_file,
        description="Persisted session file",
    )
    toast_seconds: float = Field(
        default_factory=lambda: float(os.getenv("VAULT_TOAST_SECONDS", "2.5")),
        gt=0.0,
        description="Notification auto-dismiss interval",
    )
    request_timeout: float | None = Field(
        default_factory=lambda: float(os.getenv("VAULT_REQUEST_TIMEOUT", "120")),
        description="Request timeout in seconds, 0 or None disables it",
    )
    serialize_operations: bool = Field(
        default_factory=lambda: _env_flag("VAULT_SERIALIZE_OPERATIONS"),
        description="Keyed single-flight guard for backend operations",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("API base URL must start with http:// or https://. Set VAULT_API_URL")
        return v.rstrip("/")

    @field_validator("request_timeout")
    @classmethod
    def disable_zero_timeout(cls, v: float | None) -> float | None:
        """Treat a zero or negative timeout as no timeout."""
        if v is None or v <= 0:
            return None
        return v


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If the backend URL is not http(s).
    """
    return ClientConfig()
