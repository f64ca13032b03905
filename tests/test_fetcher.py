"""Contains the tests for the class HTTPXFetcher."""

import io
from http import HTTPStatus

import httpx
import pytest
import respx
from httpx import Response

from bliptv import BlipTVConfig, HTTPXFetcher, Session
from tests import get_detail, get_fragment, wrap

POSTS_URL = "http://mockuser.blip.tv/posts/?skin=json&version=2"
UPLOAD_URL = "http://uploads.blip.tv/"


@pytest.fixture
def fetcher() -> HTTPXFetcher:
    """Fixture for HTTPXFetcher."""
    return HTTPXFetcher(user_agent="bliptv-tests", timeout=5)


@respx.mock
def test_get(fetcher: HTTPXFetcher) -> None:
    """Test the conversion of GET responses."""
    route = respx.get(POSTS_URL).mock(
        Response(
            HTTPStatus.OK,
            text=wrap([]),
            headers=[("Set-Cookie", "a=1; path=/"), ("Set-Cookie", "b=2")],
        )
    )

    response = fetcher.get(POSTS_URL, headers={"Cookie": "a=1"})

    assert response.is_success
    assert response.text == wrap([])
    assert response.headers["set-cookie"] == "a=1; path=/"

    request = route.calls.last.request
    assert request.headers["User-Agent"] == "bliptv-tests"
    assert request.headers["Cookie"] == "a=1"


@respx.mock
def test_get_error_status(fetcher: HTTPXFetcher) -> None:
    """Test that error statuses are returned, not raised."""
    respx.get(POSTS_URL).mock(Response(HTTPStatus.NOT_FOUND))

    response = fetcher.get(POSTS_URL)

    assert response.status_code == HTTPStatus.NOT_FOUND
    assert not response.is_success


@respx.mock
def test_connection_error(fetcher: HTTPXFetcher) -> None:
    """Test that transport failures become ConnectionError."""
    respx.get(POSTS_URL).mock(side_effect=httpx.ConnectError("refused"))

    with pytest.raises(ConnectionError):
        fetcher.get(POSTS_URL)


@respx.mock
def test_post(fetcher: HTTPXFetcher) -> None:
    """Test sending multipart uploads."""
    bodies: list[bytes] = []

    def upload(request: httpx.Request) -> Response:
        bodies.append(request.read())
        return Response(HTTPStatus.OK, text="<response><post_url>x</post_url></response>")

    respx.post(UPLOAD_URL).mock(side_effect=upload)

    response = fetcher.post(
        UPLOAD_URL, data={"title": "My video"}, files={"file": io.BytesIO(b"data")}
    )

    assert response.is_success
    body = bodies[0]
    assert b'name="title"' in body
    assert b"My video" in body
    assert b'name="file"' in body


@respx.mock
def test_session_with_httpx() -> None:
    """Test a session using the default transport."""
    respx.get("http://blip.tv/dashboard/?userlogin=mockuser&password=pw").mock(
        Response(HTTPStatus.OK, headers={"Set-Cookie": "sid=xyz; path=/"})
    )
    respx.get("http://mockuser.blip.tv/posts?skin=json&version=2").mock(
        Response(HTTPStatus.OK, text=wrap([get_fragment(11)]))
    )
    detail = respx.get("http://blip.tv/file/11?skin=json&version=2").mock(
        Response(HTTPStatus.OK, text=wrap([get_detail(11)]))
    )

    session = Session(
        {"username": "mockuser", "password": "pw"},
        config=BlipTVConfig(user_agent="bliptv-tests"),
    )
    videos = session.all_videos_from_login()

    assert session.cookie == "sid=xyz"
    assert [video.id for video in videos] == [11]
    assert detail.calls.last.request.headers["Cookie"] == "sid=xyz"


@respx.mock
def test_redirect(fetcher: HTTPXFetcher) -> None:
    """Test that redirects are followed and keep the cookie they set."""
    respx.get(POSTS_URL).mock(
        Response(
            HTTPStatus.FOUND,
            headers={"Location": "http://mockuser.blip.tv/", "Set-Cookie": "a=1"},
        )
    )
    respx.get("http://mockuser.blip.tv/").mock(Response(HTTPStatus.OK, text=wrap([])))

    response = fetcher.get(POSTS_URL)

    assert response.status_code == HTTPStatus.OK
    assert response.text == wrap([])
    assert response.headers["set-cookie"] == "a=1"


@respx.mock
def test_session_with_redirected_login() -> None:
    """Test logging in when the dashboard redirects after setting the cookie."""
    respx.get("http://blip.tv/dashboard/?userlogin=mockuser&password=pw").mock(
        Response(
            HTTPStatus.FOUND,
            headers={
                "Location": "http://blip.tv/dashboard/home",
                "Set-Cookie": "sid=1; path=/",
            },
        )
    )
    home = respx.get("http://blip.tv/dashboard/home").mock(Response(HTTPStatus.OK))

    session = Session(
        {"username": "mockuser", "password": "pw"},
        config=BlipTVConfig(user_agent="bliptv-tests"),
    )

    assert session.cookie == "sid=1"
    assert home.called
