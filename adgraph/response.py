"""Responses from the directory API and classification of its errors."""

from __future__ import annotations

from dataclasses import dataclass

NOT_FOUND = 404


@dataclass(frozen=True)
class Response:
    """The HTTP outcome of a call; ``status_code`` is None when no response arrived."""

    status_code: int | None = None


class GraphError(Exception):
    """An error returned by a directory API call, with the response that came back."""

    def __init__(self, message: str = "", response: Response | None = None) -> None:
        super().__init__(message)
        self.response = response if response is not None else Response()


class DetailedError(GraphError):
    """A wrapper around the underlying error that caused a call to fail."""

    def __init__(
        self,
        message: str = "",
        original: BaseException | None = None,
        response: Response | None = None,
    ) -> None:
        super().__init__(message or (str(original) if original else ""), response)
        self.original = original


class NetworkError(Exception):
    """A transport failure that may be a timeout or a temporary condition."""

    def __init__(
        self, message: str = "network error", *, timeout: bool = False, temporary: bool = False
    ) -> None:
        super().__init__(message)
        self.timeout = timeout
        self.temporary = temporary


def response_was_status_code(response: Response | None, status_code: int) -> bool:
    """Whether a response arrived and carries the given status code."""
    return response is not None and response.status_code == status_code


def response_was_not_found(response: Response | None) -> bool:
    """Whether a response arrived with status 404."""
    return response_was_status_code(response, NOT_FOUND)


def response_error_is_retryable(error: BaseException | None) -> bool:
    """Whether an error is a network timeout or temporary failure."""
    if isinstance(error, DetailedError):
        error = error.original
    if isinstance(error, NetworkError):
        return error.temporary or error.timeout
    return False