"""Contains custom exceptions for the bliptv package."""

__all__ = [
    "AuthenticationError",
    "AuthenticationRequiredError",
    "BlipTVError",
    "HTTPError",
    "InvalidAttributesError",
    "InvalidConfigurationError",
    "MalformedResponseError",
    "UploadError",
    "VideoDeleteError",
    "VideoResponseError",
]

import sys
from http import HTTPStatus

if sys.version_info >= (3, 12):  # pragma: no cover
    from typing import override  # novm
else:
    from typing_extensions import override


class BlipTVError(Exception):
    """Base class for every error raised by the bliptv package."""


class HTTPError(BlipTVError):
    """Exception raised when the service answers with an unexpected status."""

    @override
    def __init__(self, message: str, status_code: int | HTTPStatus) -> None:
        """Initialize the HTTPError object.

        :param message: The error message
        :param status_code: The status code of the error
        """
        super().__init__(message)
        self.status_code = (
            status_code
            if isinstance(status_code, HTTPStatus)
            else HTTPStatus(status_code)
        )
        self.message = message

    @override
    def __str__(self) -> str:
        """Return a string representation of the HTTPError object."""
        return f"Status code: {self.status_code}: {self.message}"


class AuthenticationRequiredError(BlipTVError):
    """Raised when an operation needs a username, password or cookie that is
    not set.
    """

    def __init__(
        self,
        message: str = "Method that you're trying to execute requires "
        "username and password.",
    ) -> None:
        super().__init__(message)


class AuthenticationError(BlipTVError):
    """Raised when logging in did not yield a session cookie."""


class InvalidConfigurationError(BlipTVError):
    """Raised when a session is created with unrecognized attributes."""


class InvalidAttributesError(BlipTVError):
    """Raised when an operation is given missing or unrecognized attributes."""


class MalformedResponseError(BlipTVError):
    """Raised when a JSON or XML response body cannot be parsed."""


class VideoResponseError(MalformedResponseError):
    """Raised when fetching the details of a video results in an error."""


class UploadError(BlipTVError):
    """Raised when an upload does not yield the URL of the new post."""


class VideoDeleteError(BlipTVError):
    """Raised when the service refuses to delete a video."""

    @override
    def __init__(
        self,
        code: str | None = None,
        message: str | None = None,
        *,
        details: str | None = None,
    ) -> None:
        """Initialize the VideoDeleteError object.

        :param code: The error code reported by the service
        :param message: The error message reported by the service
        :param details: The raw response, used when the service did not report
            an error code or message
        """
        self.code = code
        self.message = message
        self.details = details
        super().__init__(str(self))

    @override
    def __str__(self) -> str:
        """Return a string representation of the VideoDeleteError object."""
        if self.code is None and self.message is None:
            return f"Failed to delete video: {self.details}"

        return f"{self.code}: {self.message}"
