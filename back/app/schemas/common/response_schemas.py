# Standard library imports
from typing import Any

# Third-party imports
from pydantic import BaseModel

# A single message, one message per invalid field, or structured context
DetailsType = str | list[str] | dict[str, Any]


class ErrorDetails(BaseModel):
    code: str
    message: str
    details: DetailsType | None = None


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response rendered by the API exception handlers."""

    ok: bool = False
    error: ErrorDetails

    @classmethod
    def from_error(cls, code: str, message: str, details: DetailsType | None = None) -> "ErrorResponse":
        return cls(error=ErrorDetails(code=code, message=message, details=details))
