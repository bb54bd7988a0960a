from typing import Any, Mapping, Optional


class ServiceValidationError(Exception):
    """Raised when input data is invalid or a precondition for a service call is not met.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers (400)
    """

    http_status = 400

    def __init__(self, message: str = "Invalid input", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class InvalidVoteError(ServiceValidationError):
    """Raised when a vote value is neither "good" nor "bad"."""

    def __init__(self, vote: Any):
        super().__init__(
            f"Invalid vote value: {vote!r}",
            details={"vote": vote, "allowed": ["good", "bad"]},
            code="INVALID_VOTE",
        )
        self.vote = vote


class NotFoundError(Exception):
    """Raised when a requested resource was not found.

    Attributes are similar to ServiceValidationError. http_status is 404.
    """

    http_status = 404

    def __init__(self, message: str = "Not found", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class DishNotFoundError(NotFoundError):
    """Raised when no dish exists under the given id."""

    def __init__(self, dish_id: str):
        super().__init__(
            f"Dish {dish_id} not found",
            details={"dish_id": dish_id},
            code="DISH_NOT_FOUND",
        )
        self.dish_id = dish_id


class StoreUnavailableError(Exception):
    """Raised when the record store call fails (network, throttling, missing table).

    The original error is kept on ``__cause__``; ``message`` is meant for logs only.
    http_status is 500.
    """

    http_status = 500

    def __init__(self, message: str = "Record store unavailable", operation: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.operation = operation

    def __str__(self) -> str:
        return self.message
