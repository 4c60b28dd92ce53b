from pydantic import BaseModel, ConfigDict, Field

DEFAULT_ENDPOINT = "https://oshi.at"


class OshiConfig(BaseModel):
    """Client configuration.
    Shared read-only by every call issued through a client instance.
    """

    model_config = ConfigDict(frozen=True)

    endpoint: str = DEFAULT_ENDPOINT
    """Base URL of the service."""
    timeout: float | None = Field(30.0, gt=0)
    """Timeout in seconds for the transport the client builds when none is injected."""
