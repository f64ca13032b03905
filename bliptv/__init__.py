"""Contains the Session class which is used to log in to blip.tv, upload videos,
list and search videos and delete them.
"""

__all__ = [
    "BlipTVConfig",
    "FetchResponse",
    "HTTPXFetcher",
    "HttpFetcher",
    "Session",
    "Skin",
    "Video",
]

import logging
from collections.abc import Mapping
from typing import IO, Any

from bliptv.api_spec import check_attributes
from bliptv.enums import Skin
from bliptv.errors import (
    AuthenticationError,
    AuthenticationRequiredError,
    HTTPError,
    InvalidAttributesError,
    InvalidConfigurationError,
    MalformedResponseError,
    UploadError,
)
from bliptv.fetcher import FetchResponse, HttpFetcher, HTTPXFetcher
from bliptv.models import BlipTVConfig
from bliptv.models.video import Video
from bliptv.parser import parse_wrapped_json, parse_xml
from bliptv.types import Attributes, JSONValue

_MAX_PAGE_LENGTH = 100
_FILE_ATTRIBUTES = ("file", "thumbnail")


class Session:
    """A class that encapsulates a connection to blip.tv, either anonymous or
    authenticated with a session cookie.
    """

    _UPLOAD_DEFAULTS = {
        "post": "1",
        "item_type": "file",
        "skin": Skin.XMLHTTPREQUEST.value,
        "file_role": "Web",
    }

    def __init__(
        self,
        attributes: Attributes | None = None,
        *,
        fetcher: HttpFetcher | None = None,
        config: BlipTVConfig | None = None,
    ) -> None:
        """Set up the Session instance. If both a username and a password are
        given, log in immediately.

        :param attributes: The ``username`` and ``password`` of the user.
        :param fetcher: The transport to use. If not provided, an HTTPXFetcher is
            created from the configuration.
        :param config: The configuration to use. If not provided, the defaults
            for blip.tv are used.
        :raises InvalidConfigurationError: If an unknown attribute is given.
        :raises AuthenticationError: If logging in did not yield a cookie.
        """
        attributes = check_attributes(
            "session.new", attributes, error=InvalidConfigurationError
        )

        self._logger = logging.getLogger(self.__class__.__name__)
        self._config = config or BlipTVConfig()
        self._fetcher = fetcher or HTTPXFetcher(
            user_agent=self._config.user_agent, timeout=self._config.timeout
        )

        self.username: str | None = attributes.get("username")
        self.password: str | None = attributes.get("password")
        self.cookie: str | None = None

        if self.username and self.password:
            self.login()

    @property
    def config(self) -> BlipTVConfig:
        """Get the configuration of the session.

        :return: The configuration.
        """
        return self._config

    @property
    def is_authenticated(self) -> bool:
        """Check if the session holds a cookie.

        :return: True if logged in, False otherwise.
        """
        return self.cookie is not None

    def login(self) -> str:
        """Log in with the credentials of the session and store the session
        cookie. Calling it again refreshes the cookie.

        :return: The session cookie.
        :raises AuthenticationRequiredError: If the session has no credentials.
        :raises AuthenticationError: If logging in did not yield a cookie.
        """
        if not self.username or not self.password:
            raise AuthenticationRequiredError()

        try:
            response = self._fetcher.get(
                self._config.login_url(self.username, self.password)
            )
        except ConnectionError as ex:
            raise AuthenticationError(f"Failed to log in as {self.username}") from ex

        if not response.is_success:
            raise AuthenticationError(
                f"Failed to log in as {self.username}: status {response.status_code}"
            )

        cookie = response.headers.get("set-cookie", "").split(";", 1)[0].strip()
        if not cookie:
            raise AuthenticationError(
                f"Failed to log in as {self.username}: no session cookie received"
            )

        self.cookie = cookie
        self._logger.info("Successfully logged in as %s", self.username)

        return cookie

    def upload_video(self, attributes: Attributes) -> Video:
        """Upload a video.

        :param attributes: The attributes of the upload. ``title`` and ``file``
            are required; ``thumbnail``, ``nsfw``, ``description``, ``username``,
            ``password``, ``keywords``, ``categories``, ``license`` and
            ``interactive_post`` are optional.
        :return: The uploaded video.
        :raises InvalidAttributesError: If a required attribute is missing or an
            unknown attribute is given.
        :raises AuthenticationRequiredError: If neither a cookie nor credentials
            are available.
        :raises UploadError: If the upload did not yield the URL of the post.
        """
        attributes = check_attributes("videos.upload", attributes)

        credentials = {
            key: value
            for key, value in (("username", self.username), ("password", self.password))
            if value
        }
        params = {**self._UPLOAD_DEFAULTS, **credentials, **attributes}

        has_credentials = bool(params.get("username") and params.get("password"))
        if self.cookie is None and not has_credentials:
            raise AuthenticationRequiredError()

        data, files = self._to_form(params)

        self._logger.debug("Uploading video: %s", params["title"])
        try:
            response = self._fetcher.post(
                self._config.upload_url,
                data=data,
                files=files,
                headers=self._cookie_headers(),
            )
        except ConnectionError as ex:
            raise UploadError(f"Failed to upload video: {params['title']}") from ex

        if not response.is_success:
            raise UploadError(
                f"Failed to upload video: {params['title']}: "
                f"status {response.status_code}"
            )

        post_url = self._get_post_url(response)
        self._logger.info("Successfully uploaded video: %s", post_url)

        return self.get_video(post_url)

    def get_video(self, url: str) -> Video:
        """Get the video posted at the given URL.

        :param url: The URL of the video post.
        :return: The video.
        :raises VideoResponseError: If the details of the video cannot be fetched.
        """
        return Video.from_url(
            url, fetcher=self._fetcher, cookie=self.cookie, config=self._config
        )

    def find_all_videos_by_user(
        self, username: str, *, page: int = 1, pagelen: int = 20
    ) -> list[Video]:
        """Look up all videos posted by the given user.

        The paging hints are validated but not sent to blip.tv.

        :param username: The login of the user.
        :param page: The page number of results to retrieve, starting at 1.
        :param pagelen: The number of results per page, up to 100.
        :return: The videos. Empty if the listing has no items.
        :raises InvalidAttributesError: If the paging hints are out of range.
        :raises HTTPError: If the listing request failed.
        :raises MalformedResponseError: If the listing is not valid JSON.
        :raises VideoResponseError: If the details of a video cannot be fetched.
        """
        self._check_paging(page, pagelen)

        payload = self._get_json(self._config.user_posts_url(username))
        return self._parse_videos(payload)

    def all_videos_from_login(self, *, page: int = 1, pagelen: int = 20) -> list[Video]:
        """Look up all videos of the logged in user, including private ones.

        The paging hints are validated but not sent to blip.tv.

        :param page: The page number of results to retrieve, starting at 1.
        :param pagelen: The number of results per page, up to 100.
        :return: The videos. Empty if the listing has no items.
        :raises AuthenticationRequiredError: If the session is not logged in.
        :raises InvalidAttributesError: If the paging hints are out of range.
        :raises HTTPError: If the listing request failed.
        :raises MalformedResponseError: If the listing is not valid JSON.
        :raises VideoResponseError: If the details of a video cannot be fetched.
        """
        if self.cookie is None or not self.username:
            raise AuthenticationRequiredError()

        self._check_paging(page, pagelen)

        payload = self._get_json(
            self._config.user_posts_url(self.username, private=True),
            headers=self._cookie_headers(),
        )
        return self._parse_videos(payload)

    def search_videos(self, search_string: str) -> list[Video]:
        """Search for videos. This is a direct call of the search of blip.tv, so no
        guarantees are made about the results.

        :param search_string: The search terms. They are percent-encoded.
        :return: The videos. Empty if nothing matched.
        :raises HTTPError: If the search request failed.
        :raises MalformedResponseError: If the results are not valid JSON.
        :raises VideoResponseError: If the details of a video cannot be fetched.
        """
        payload = self._get_json(self._config.search_url(search_string))
        return self._parse_videos(payload)

    def delete_video(self, video: Video, *, reason: str = "because") -> None:
        """Delete a video with the credentials of the session.

        :param video: The video to delete.
        :param reason: A free text reason for the deletion.
        :raises AuthenticationRequiredError: If the session has no credentials.
        :raises VideoDeleteError: If the service did not confirm the deletion.
        """
        if not self.username or not self.password:
            raise AuthenticationRequiredError()

        video.delete(
            {"userlogin": self.username, "password": self.password}, reason=reason
        )

    def _check_paging(self, page: int, pagelen: int) -> None:
        if page < 1:
            raise InvalidAttributesError(f"page must be at least 1, got {page}")

        if not 1 <= pagelen <= _MAX_PAGE_LENGTH:
            raise InvalidAttributesError(
                f"pagelen must be between 1 and {_MAX_PAGE_LENGTH}, got {pagelen}"
            )

        self._logger.debug(
            "Paging hints are not sent to blip.tv (page=%d, pagelen=%d)", page, pagelen
        )

    def _cookie_headers(self) -> dict[str, str]:
        return {"Cookie": self.cookie} if self.cookie else {}

    def _get_json(
        self, url: str, *, headers: Mapping[str, str] | None = None
    ) -> JSONValue:
        """Send a GET request and parse the wrapped JSON response.

        :param url: The URL to request.
        :param headers: Additional request headers.
        :return: The parsed JSON value.
        :raises HTTPError: If the request failed.
        :raises ConnectionError: If the service could not be reached.
        :raises MalformedResponseError: If the response is not valid JSON.
        """
        response = self._fetcher.get(url, headers=headers)

        if not response.is_success:
            raise HTTPError(f"Failed to fetch {url}", response.status_code)

        return parse_wrapped_json(
            response.text,
            prefix_length=self._config.envelope_prefix_length,
            suffix_length=self._config.envelope_suffix_length,
        )

    def _parse_videos(self, payload: JSONValue) -> list[Video]:
        """Create a video for each item of a list response.

        :param payload: The parsed JSON of the list response.
        :return: The videos, or an empty list if the payload is not a list.
        """
        if not isinstance(payload, list):
            self._logger.debug(
                "Ignoring list response of type %s", type(payload).__name__
            )
            return []

        return [
            Video.from_fragment(
                item, fetcher=self._fetcher, cookie=self.cookie, config=self._config
            )
            for item in payload
        ]

    @staticmethod
    def _to_form(
        params: Mapping[str, Any],
    ) -> tuple[dict[str, str], dict[str, IO[Any]]]:
        """Split upload parameters into form fields and file fields.

        :param params: The upload parameters.
        :return: The form fields and the file fields.
        """
        data: dict[str, str] = {}
        files: dict[str, IO[Any]] = {}

        for key, value in params.items():
            if value is None:
                continue

            if key in _FILE_ATTRIBUTES:
                files[key] = value
            elif key == "categories" and isinstance(value, Mapping):
                for name, category in value.items():
                    data[f"categories[{name}]"] = str(category)
            elif key == "keywords" and isinstance(value, list | tuple | set):
                data[key] = ",".join(str(keyword) for keyword in value)
            elif isinstance(value, bool):
                data[key] = "1" if value else "0"
            else:
                data[key] = str(value)

        return data, files

    def _get_post_url(self, response: FetchResponse) -> str:
        """Extract the URL of the new post from an upload response.

        :param response: The upload response.
        :return: The URL of the post.
        :raises UploadError: If the response has no post URL.
        """
        try:
            document = parse_xml(response.text)
        except MalformedResponseError as ex:
            raise UploadError("Upload response is not valid XML") from ex

        root = next(iter(document.values()))
        post_url = root.get("post_url") if isinstance(root, dict) else None

        if not isinstance(post_url, str) or not post_url.strip():
            raise UploadError(f"Upload response has no post URL: {response.text!r}")

        return post_url.strip()
