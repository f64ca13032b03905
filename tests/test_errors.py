"""Test errors."""

from http import HTTPStatus

from bliptv.errors import (
    AuthenticationRequiredError,
    BlipTVError,
    HTTPError,
    MalformedResponseError,
    VideoDeleteError,
    VideoResponseError,
)


def test_http_errors() -> None:
    """Test creating HTTPError instances."""
    error = HTTPError("test", 400)
    assert isinstance(error.status_code, HTTPStatus)

    error = HTTPError("test", HTTPStatus.BAD_REQUEST)
    assert isinstance(error.status_code, HTTPStatus)

    assert error.message in str(error)
    assert "400" in str(error)
    assert isinstance(error, BlipTVError)


def test_video_delete_error() -> None:
    """Test the message of VideoDeleteError instances."""
    error = VideoDeleteError("403", "Forbidden")
    assert "403" in str(error)
    assert "Forbidden" in str(error)

    error = VideoDeleteError(details="<raw response>")
    assert error.code is None
    assert "<raw response>" in str(error)


def test_error_hierarchy() -> None:
    """Test the relationships between errors."""
    assert issubclass(VideoResponseError, MalformedResponseError)
    assert "username and password" in str(AuthenticationRequiredError())
