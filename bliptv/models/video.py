"""Contains the dataclass for the video model."""

__all__ = ["Video"]

import json
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Self

from bliptv.api_spec import check_attributes
from bliptv.errors import MalformedResponseError, VideoDeleteError, VideoResponseError
from bliptv.fetcher import HttpFetcher
from bliptv.models import BlipTVConfig
from bliptv.parser import parse_wrapped_json, parse_xml
from bliptv.types import Attributes, JSONValue

_logger = logging.getLogger(__name__)


@dataclass
class Video:
    """Represents a blip.tv video."""

    id: int
    """The unique ID of the video. It cannot be reassigned."""

    url: str
    """The URL of the video post"""

    title: str = ""
    """The title of the video"""

    description: str = ""
    """The description of the video"""

    guid: str = ""
    """The GUID of the post"""

    deleted: bool = False
    """Whether the video has been deleted"""

    views: int | None = None
    """The number of views of the video, if available"""

    tags: list[str] = field(default_factory=list)
    """The tags of the video"""

    author: str = ""
    """The login of the user who posted the video"""

    update_time: datetime | None = None
    """The time when the video was last updated"""

    embed_url: str = ""
    """The URL of the embeddable player"""

    embed_code: str = ""
    """The HTML snippet embedding the player"""

    thumbnail_url: str = ""
    """The URL of the thumbnail"""

    thumbnail120_url: str = ""
    """The URL of the 120 pixels wide thumbnail"""

    cookie: str | None = field(default=None, repr=False, compare=False)
    """The session cookie borrowed to fetch the details of the video"""

    fetcher: HttpFetcher | None = field(default=None, repr=False, compare=False)
    """The transport used to fetch and delete the video"""

    config: BlipTVConfig = field(
        default_factory=BlipTVConfig, repr=False, compare=False
    )
    """The configuration of the session that created the video"""

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("The ID of a video cannot be reassigned")

        super().__setattr__(name, value)

    @property
    def tags_string(self) -> str:
        """Get the tags as a comma-joined string for display.

        :return: The joined tags.
        """
        return ",".join(self.tags)

    @classmethod
    def from_fragment(
        cls,
        fragment: JSONValue,
        *,
        fetcher: HttpFetcher,
        cookie: str | None = None,
        config: BlipTVConfig | None = None,
    ) -> Self:
        """Create a video from an item of a list or search response.

        Items of list responses do not carry every attribute, so the details of the
        video are always fetched from the URL of the item.

        :param fragment: The JSON object of the item.
        :param fetcher: The transport used to fetch the details.
        :param cookie: The session cookie, if logged in.
        :param config: The configuration of the session.
        :return: The video.
        :raises VideoResponseError: If the item has no URL or the details cannot
            be fetched.
        """
        url = fragment.get("url") if isinstance(fragment, dict) else None
        if not isinstance(url, str) or not url:
            raise VideoResponseError(f"Video item has no URL: {fragment!r}")

        return cls.from_url(url, fetcher=fetcher, cookie=cookie, config=config)

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        fetcher: HttpFetcher,
        cookie: str | None = None,
        config: BlipTVConfig | None = None,
    ) -> Self:
        """Create a video by fetching the details of the post at the given URL.

        :param url: The URL of the video post.
        :param fetcher: The transport used to fetch the details.
        :param cookie: The session cookie, if logged in.
        :param config: The configuration of the session.
        :return: The video.
        :raises VideoResponseError: If the details cannot be fetched.
        """
        config = config or BlipTVConfig()
        attributes = _fetch_attributes(
            url, fetcher=fetcher, cookie=cookie, config=config
        )
        video_id = attributes.pop("id")

        return cls(
            video_id, url, **attributes, cookie=cookie, fetcher=fetcher, config=config
        )

    def refresh(self) -> Self:
        """Fetch the details of the video again and update every attribute except
        the ID. Useful to check up on encoding progress.

        :return: The current instance for method chaining.
        :raises VideoResponseError: If the details cannot be fetched. The video is
            left unchanged.
        """
        attributes = _fetch_attributes(
            self.url,
            fetcher=self._require_fetcher(),
            cookie=self.cookie,
            config=self.config,
        )
        fetched_id = attributes.pop("id")
        if fetched_id != self.id:
            _logger.debug(
                "Ignoring ID %d returned while refreshing video %d", fetched_id, self.id
            )

        for name, value in attributes.items():
            setattr(self, name, value)

        return self

    def delete(
        self,
        credentials: Attributes,
        section: str = "file",
        reason: str = "because",
    ) -> None:
        """Delete the video from blip.tv.

        :param credentials: The ``userlogin`` (or ``username``) and ``password`` of
            the owner.
        :param section: The section the video is deleted from.
        :param reason: A free text reason for the deletion.
        :raises InvalidAttributesError: If the credentials are incomplete.
        :raises VideoDeleteError: If the service did not confirm the deletion or
            could not be reached.
        :raises MalformedResponseError: If the response is not valid XML.
        """
        credentials = check_attributes("videos.delete", credentials)
        fetcher = self._require_fetcher()

        url = self.config.api_url(
            userlogin=credentials["userlogin"],
            password=credentials["password"],
            cmd="delete",
            s=section,
            id=str(self.id),
            reason=reason,
        )

        _logger.debug("Deleting video %d", self.id)
        try:
            response = fetcher.get(url)
        except ConnectionError as ex:
            raise VideoDeleteError(details=f"request failed: {ex}") from ex

        _ensure_deleted(parse_xml(response.text))

        _logger.info("Successfully deleted video %d", self.id)

    def _require_fetcher(self) -> HttpFetcher:
        if self.fetcher is None:
            raise RuntimeError("Video was created without a fetcher")

        return self.fetcher


def _fetch_attributes(
    url: str, *, fetcher: HttpFetcher, cookie: str | None, config: BlipTVConfig
) -> dict[str, Any]:
    """Fetch the details of a video and map them to the attributes of Video.

    :param url: The URL of the video post.
    :param fetcher: The transport to use.
    :param cookie: The session cookie, if any.
    :param config: The configuration of the session.
    :return: The attributes, including the ID.
    :raises VideoResponseError: If the details cannot be fetched or parsed.
    """
    headers = {"Cookie": cookie} if cookie else {}
    try:
        response = fetcher.get(config.detail_url(url), headers=headers)
    except ConnectionError as ex:
        raise VideoResponseError(f"Failed to fetch video details from {url}") from ex

    if not response.is_success:
        raise VideoResponseError(
            f"Failed to fetch video details from {url}: status {response.status_code}"
        )

    try:
        payload = parse_wrapped_json(
            response.text,
            prefix_length=config.envelope_prefix_length,
            suffix_length=config.envelope_suffix_length,
        )
    except MalformedResponseError as ex:
        raise VideoResponseError(f"Failed to parse video details from {url}") from ex

    if isinstance(payload, list):
        payload = payload[0] if payload else None

    if not isinstance(payload, dict):
        raise VideoResponseError(f"Video details from {url} are empty")

    return _parse_attributes(payload)


def _parse_attributes(detail: dict[str, Any]) -> dict[str, Any]:
    """Map a detail object of the service to the attributes of Video.

    :param detail: The JSON object describing a single video.
    :return: The attributes, including the ID.
    :raises VideoResponseError: If the ID is missing or not an integer.
    """
    try:
        video_id = int(detail["itemId"])
    except (KeyError, TypeError, ValueError) as ex:
        raise VideoResponseError(
            f"Video details have no valid itemId: {detail.get('itemId')!r}"
        ) from ex

    return {
        "id": video_id,
        "title": _parse_str(detail.get("title")),
        "description": _parse_str(detail.get("description")),
        "guid": _parse_str(detail.get("postsGuid")),
        "deleted": _parse_bool(detail.get("deleted")),
        "views": _parse_views(video_id, detail.get("views")),
        "tags": _parse_tags(detail.get("tags")),
        "author": _parse_str(detail.get("login")),
        "update_time": _parse_timestamp(video_id, detail.get("datestampUnixtime")),
        "embed_url": _parse_str(detail.get("embedUrl")),
        "embed_code": _parse_str(detail.get("embedCode")),
        "thumbnail_url": _parse_str(detail.get("thumbnailUrl")),
        "thumbnail120_url": _parse_str(detail.get("thumbnail120Url")),
    }


def _parse_str(value: Any) -> str:
    return "" if value is None else str(value)


def _parse_views(video_id: int, value: Any) -> int | None:
    if value in (None, ""):
        return None

    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        _logger.debug("Ignoring invalid views of video %d: %r", video_id, value)
        return None


def _parse_timestamp(video_id: int, value: Any) -> datetime | None:
    """Convert Unix epoch seconds to a UTC datetime.

    :param video_id: The ID of the video, for logging.
    :param value: The raw timestamp.
    :return: The datetime, or None if the timestamp is missing or out of range.
    """
    if value in (None, ""):
        return None

    try:
        return datetime.fromtimestamp(int(value), tz=UTC)
    except (TypeError, ValueError, OverflowError, OSError):
        _logger.debug("Ignoring invalid timestamp of video %d: %r", video_id, value)
        return None


def _parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")

    return bool(value)


def _parse_tags(value: Any) -> list[str]:
    """Normalize the tags of a video.

    Tags usually arrive as a list of strings, but a comma-separated string and
    the ``{"string": ...}`` shape of XML responses are accepted too.

    :param value: The raw tags.
    :return: The tags.
    """
    if isinstance(value, dict):
        value = value.get("string")

    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]

    if isinstance(value, list):
        return [str(tag) for tag in value]

    return []


def _ensure_deleted(document: dict[str, Any]) -> None:
    """Check the status document returned by a delete request.

    :param document: The parsed XML response.
    :raises VideoDeleteError: If the status is not OK.
    """
    response = document.get("response")
    response = response if isinstance(response, dict) else {}

    if response.get("status") == "OK":
        return

    error = response.get("error")
    if isinstance(error, dict) and ("code" in error or "message" in error):
        raise VideoDeleteError(error.get("code"), error.get("message"))

    raise VideoDeleteError(details=json.dumps(document, indent=2, default=str))
