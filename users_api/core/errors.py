from typing import Dict, Optional


class ApiError(Exception):
    """Base error carrying the fields exposed in an error envelope."""

    kind = "ApiError"
    status = 500

    def __init__(
        self,
        message: str,
        *,
        kind: Optional[str] = None,
        status: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind
        if status is not None:
            self.status = status

    def to_dict(self) -> Dict:
        return {"kind": self.kind, "message": self.message, "status": self.status}


class StoreError(ApiError):
    """Raised by a repository when the backend call fails."""

    kind = "StoreError"
    status = 500


class ConditionalCheckFailedError(StoreError):
    kind = "ConditionalCheckFailedException"
    status = 400

    def __init__(self, message: str = "The conditional request failed"):
        super().__init__(message)
