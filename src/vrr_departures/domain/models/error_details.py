"""Relay error response body models."""

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetails(BaseModel):
    """The ``details`` object of a relay error response."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: str
    status: int | None = None
    status_text: str | None = Field(default=None, alias="statusText")
    code: str | None = None
    stop_id: str | None = Field(default=None, alias="stopId")
    original_message: str | None = Field(default=None, alias="originalMessage")


class ErrorResponse(BaseModel):
    """A relay error response: ``{error, details}``."""

    model_config = ConfigDict(frozen=True)

    error: str
    details: ErrorDetails

    def to_json(self) -> dict:
        """Serialize using the wire field names, dropping unset details."""
        return self.model_dump(by_alias=True, exclude_none=True)
