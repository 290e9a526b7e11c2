"""Response envelope DTO"""
from dataclasses import dataclass
from typing import Any, Optional

DEFAULT_SUCCESS_MESSAGE = "Request processed successfully."
INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


@dataclass
class ServerApiResponse:
    """Envelope returned by every use case"""

    status: int
    message: str = ""
    data: Optional[Any] = None
    metadata: Optional[dict] = None

    @property
    def success(self) -> bool:
        return 200 <= self.status < 300

    @classmethod
    def ok(cls, message: str = DEFAULT_SUCCESS_MESSAGE, data: Any = None, metadata: Optional[dict] = None) -> 'ServerApiResponse':
        return cls(status=200, message=message, data=data, metadata=metadata)

    @classmethod
    def created(cls, message: str, data: Any = None) -> 'ServerApiResponse':
        return cls(status=201, message=message, data=data)

    @classmethod
    def internal_error(cls) -> 'ServerApiResponse':
        return cls(status=500, message=INTERNAL_ERROR_MESSAGE)

    @classmethod
    def from_error(cls, error) -> 'ServerApiResponse':
        """Build from a GameRuleError"""
        metadata = None
        remaining = getattr(error, "remaining_seconds", None)
        if remaining is not None:
            metadata = {"remaining_seconds": remaining}
        return cls(status=error.status, message=error.message, metadata=metadata)

    def to_dict(self) -> dict:
        """Convert to dictionary, empty optional fields omitted"""
        result = {
            "status": self.status,
            "success": self.success,
            "message": self.message,
        }
        if self.data is not None:
            result["data"] = _serialize(self.data)
        if self.metadata is not None:
            result["metadata"] = _serialize(self.metadata)
        return result


def _serialize(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        return {key: _serialize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    return value
