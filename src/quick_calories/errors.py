"""Errors raised while estimating nutrition through the AI gateway."""


class EstimationError(Exception):
    """Base error for nutrition estimation failures."""

    user_message = "Something went wrong"

    def __str__(self) -> str:
        return self.user_message


class RateLimitExceeded(EstimationError):
    """The free daily quota is used up and no bypass is configured."""

    user_message = "Daily AI request limit reached"


class InvalidResponse(EstimationError):
    """The gateway answered but the payload was not usable."""

    user_message = "Unable to parse nutritional data"


class ApiError(EstimationError):
    """The upstream API reported a failure with a non-200 status."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def user_message(self) -> str:  # type: ignore[override]
        return self.message


class NetworkError(EstimationError):
    """The request never completed at the transport layer."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(cause)
        self.cause = cause

    @property
    def user_message(self) -> str:  # type: ignore[override]
        return f"Network error: {self.cause}"


class ImageEncodingError(EstimationError):
    """A photo could not be decoded or re-encoded for the vision request."""

    user_message = "Invalid image format"
