"""Contains fixtures and utility functions."""

import json
from collections.abc import Callable, Mapping
from typing import Any

from bliptv import FetchResponse, HttpFetcher

BASE_URL = "http://blip.tv/file"


def wrap(payload: Any) -> str:
    """Wrap a JSON payload in the callback envelope used by blip.tv."""
    return f"blip_ws_results({json.dumps(payload)});\n"


def get_detail(item_id: int = 1234, **overrides: Any) -> dict[str, Any]:
    """Create a mock detail object of a video."""
    detail = {
        "itemId": item_id,
        "title": "Mock Video",
        "description": "A mock video",
        "postsGuid": f"guid-{item_id}",
        "deleted": False,
        "views": 42,
        "tags": ["mock", "video"],
        "login": "mockuser",
        "datestampUnixtime": 1262304000,
        "embedUrl": f"http://blip.tv/play/{item_id}",
        "embedCode": f"<embed src='http://blip.tv/play/{item_id}'/>",
        "thumbnailUrl": f"http://a.images.blip.tv/{item_id}.jpg",
        "thumbnail120Url": f"http://a.images.blip.tv/{item_id}-120.jpg",
    }
    detail.update(overrides)
    return detail


def get_video_url(item_id: int) -> str:
    """Get the URL of a mock video post."""
    return f"{BASE_URL}/{item_id}"


def get_detail_url(item_id: int) -> str:
    """Get the URL of the JSON details of a mock video post."""
    return f"{get_video_url(item_id)}?skin=json&version=2"


def get_fragment(item_id: int) -> dict[str, Any]:
    """Create a mock item of a list response."""
    return {"itemId": item_id, "url": get_video_url(item_id), "title": "Mock Video"}


Handler = FetchResponse | Callable[[str], FetchResponse]


class StubFetcher(HttpFetcher):
    """A fetcher answering from a table of canned responses."""

    def __init__(self, responses: Mapping[str, Handler] | None = None) -> None:
        self.responses: dict[str, Handler] = dict(responses or {})
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def get(self, url, *, headers=None) -> FetchResponse:
        self.calls.append(("GET", url, {"headers": dict(headers or {})}))
        return self._respond(url)

    def post(self, url, *, data=None, files=None, headers=None) -> FetchResponse:
        self.calls.append(
            (
                "POST",
                url,
                {
                    "data": dict(data or {}),
                    "files": dict(files or {}),
                    "headers": dict(headers or {}),
                },
            )
        )
        return self._respond(url)

    def add_video(self, item_id: int, **overrides: Any) -> None:
        """Register the detail response of a mock video."""
        self.responses[get_detail_url(item_id)] = ok(wrap([get_detail(item_id, **overrides)]))

    def urls(self) -> list[str]:
        """Get the requested URLs, in order."""
        return [url for _, url, _ in self.calls]

    def _respond(self, url: str) -> FetchResponse:
        if url not in self.responses:
            raise AssertionError(f"Unexpected request: {url}")

        handler = self.responses[url]
        return handler(url) if callable(handler) else handler


def ok(text: str, headers: dict[str, str] | None = None) -> FetchResponse:
    """Create a successful response."""
    return FetchResponse(200, text, headers or {})


def refuse(url: str) -> FetchResponse:
    """Handler simulating a transport failure."""
    raise ConnectionError(f"Connection refused: {url}")
