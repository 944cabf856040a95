from .response_schemas import ErrorDetails, ErrorResponse

__all__ = ["ErrorDetails", "ErrorResponse"]
