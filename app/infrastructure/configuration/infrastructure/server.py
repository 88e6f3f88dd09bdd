"""Server infrastructure settings."""

from pydantic import Field, field_validator

from infrastructure.configuration.base import InfrastructureSettings


class ServerSettings(InfrastructureSettings):
    """Server runtime configuration.

    Environment Variables:
        SERVER_URL: Public dashboard base URL used in routing links
            (default: http://localhost:8080)

    Example:
        ```python
        from infrastructure.services import get_settings

        server_url = get_settings().server.SERVER_URL
        ```
    """

    SERVER_URL: str = Field(default="http://localhost:8080", alias="SERVER_URL")

    @field_validator("SERVER_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Routing links append paths, so the base must not end with '/'."""
        return v.rstrip("/")
