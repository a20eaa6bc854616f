"""
Exception hierarchy for Aramiyot
"""
from typing import Any, Dict, List, Optional

# Request locations FastAPI prefixes to error paths
_LOCATION_PREFIXES = ("body", "query", "path", "header", "cookie")


class AramiyotError(Exception):
    """Base class for application errors"""


class FlowError(AramiyotError):
    """A flow could not produce a typed result"""

    def __init__(self, flow_name: str, message: str):
        super().__init__(f"{flow_name}: {message}")
        self.flow_name = flow_name


class FlowInputError(FlowError):
    """Flow input failed schema validation"""

    def __init__(self, flow_name: str, details: Dict[str, Any]):
        super().__init__(flow_name, "invalid input")
        self.details = details


class FlowOutputError(FlowError):
    """Model output was missing or did not match the output schema"""


class GenerationError(AramiyotError):
    """The generative backend call failed"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class StorageError(AramiyotError):
    """Local or remote persistence failed"""


class BoardNotFoundError(AramiyotError, KeyError):
    """No board with the given id for this user"""

    def __init__(self, board_id: str):
        super().__init__(board_id)
        self.board_id = board_id

    def __str__(self) -> str:
        return f"Board not found: {self.board_id}"


class AttachmentError(AramiyotError, ValueError):
    """An attachment was rejected before upload"""


def flatten_validation_errors(errors: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Flatten pydantic error dicts into form-level and field-level messages

    Args:
        errors: Output of ``ValidationError.errors()``

    Returns:
        {"formErrors": [...], "fieldErrors": {field: [...]}}
    """
    form_errors: List[str] = []
    field_errors: Dict[str, List[str]] = {}

    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_PREFIXES]
        message = error.get("msg", "Invalid value")
        if loc:
            field_errors.setdefault(loc[0], []).append(message)
        else:
            form_errors.append(message)

    return {"formErrors": form_errors, "fieldErrors": field_errors}


class InvalidInputError(AramiyotError):
    """A request body failed validation outside of a flow"""

    def __init__(self, details: Dict[str, Any]):
        super().__init__("invalid input")
        self.details = details

    @classmethod
    def form_error(cls, message: str) -> "InvalidInputError":
        return cls({"formErrors": [message], "fieldErrors": {}})


class PayloadTooLargeError(AramiyotError):
    """Request body exceeds the configured limit"""

    def __init__(self, limit: int):
        super().__init__(f"Request body exceeds {limit} bytes")
        self.limit = limit
