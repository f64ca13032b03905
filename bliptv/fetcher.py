"""This module contains the HTTP transport used to talk to blip.tv."""

__all__ = ["FetchResponse", "HTTPXFetcher", "HttpFetcher"]

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import IO, Any

from httpx import Client, Response
from httpx import HTTPError as HTTPXError

from bliptv.types import Headers


@dataclass
class FetchResponse:
    """Represents the raw response of a request."""

    status_code: int
    """The status code of the response"""

    text: str
    """The decoded body of the response"""

    headers: dict[str, str] = field(default_factory=dict)
    """The response headers, keyed by lowercase name. For repeated headers, only
    the first value is kept. A cookie set by a followed redirect is kept when the
    final response sets none."""

    @property
    def is_success(self) -> bool:
        """Check if the status code is in the 2xx range.

        :return: True if the request succeeded, False otherwise.
        """
        return HTTPStatus.OK <= self.status_code < HTTPStatus.MULTIPLE_CHOICES


class HttpFetcher(ABC):
    """Represents a capability of issuing HTTP requests."""

    @abstractmethod
    def get(self, url: str, *, headers: Headers | None = None) -> FetchResponse:
        """Send a GET request.

        :param url: The full URL, including the query string.
        :param headers: Additional request headers.
        :return: The response.
        :raises ConnectionError: If the request could not be completed.
        """

    @abstractmethod
    def post(
        self,
        url: str,
        *,
        data: Mapping[str, str] | None = None,
        files: Mapping[str, IO[Any]] | None = None,
        headers: Headers | None = None,
    ) -> FetchResponse:
        """Send a multipart POST request.

        :param url: The full URL.
        :param data: The form fields.
        :param files: The file fields.
        :param headers: Additional request headers.
        :return: The response.
        :raises ConnectionError: If the request could not be completed.
        """


class HTTPXFetcher(HttpFetcher):
    """Issues requests with httpx, opening a new client for every request."""

    def __init__(self, *, user_agent: str, timeout: float = 30.0) -> None:
        """Create a new HTTPXFetcher instance.

        :param user_agent: The User-Agent header to send with every request.
        :param timeout: The timeout in seconds for a single request.
        """
        self._logger = logging.getLogger(self.__class__.__name__)
        self._user_agent = user_agent
        self._timeout = timeout

    def get(self, url: str, *, headers: Headers | None = None) -> FetchResponse:
        self._logger.debug("Sending GET request: %s", _redact(url))

        try:
            with Client(**self._client_options()) as client:
                response = client.get(url, headers=dict(headers or {}))
        except HTTPXError as ex:
            raise ConnectionError(f"Failed to GET {_redact(url)}") from ex

        return self._to_fetch_response(response)

    def post(
        self,
        url: str,
        *,
        data: Mapping[str, str] | None = None,
        files: Mapping[str, IO[Any]] | None = None,
        headers: Headers | None = None,
    ) -> FetchResponse:
        self._logger.debug("Sending POST request: %s", url)

        try:
            with Client(**self._client_options()) as client:
                response = client.post(
                    url,
                    data=dict(data or {}),
                    files=dict(files or {}) or None,
                    headers=dict(headers or {}),
                )
        except HTTPXError as ex:
            raise ConnectionError(f"Failed to POST {url}") from ex

        return self._to_fetch_response(response)

    def _client_options(self) -> dict[str, Any]:
        return {
            "headers": {"User-Agent": self._user_agent},
            "timeout": self._timeout,
            "follow_redirects": True,
        }

    def _to_fetch_response(self, response: Response) -> FetchResponse:
        headers: dict[str, str] = {}
        for name, value in response.headers.multi_items():
            headers.setdefault(name.lower(), value)

        # Cookies set by a redirect are not repeated on the final response
        if "set-cookie" not in headers:
            for redirect in response.history:
                cookie = redirect.headers.get_list("set-cookie")
                if cookie:
                    headers["set-cookie"] = cookie[0]
                    break

        self._logger.debug(
            "Received response with status %d (%d bytes)",
            response.status_code,
            len(response.content),
        )

        return FetchResponse(response.status_code, response.text, headers)


def _redact(url: str) -> str:
    """Hide the password in a URL before it is logged.

    :param url: The URL to redact
    :return: The URL with the value of the password parameter replaced.
    """
    if "password=" not in url:
        return url

    head, _, tail = url.partition("password=")
    _, amp, rest = tail.partition("&")
    return f"{head}password=***{amp}{rest}"
