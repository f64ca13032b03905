"""Contains the dataclasses used by the Session."""

__all__ = ["BlipTVConfig"]

from dataclasses import dataclass
from urllib.parse import quote

from bliptv.enums import Skin


@dataclass
class BlipTVConfig:
    """Represents the configuration of a Session."""

    domain: str = "blip.tv"
    """The domain hosting the blip.tv API"""

    upload_url: str = "http://uploads.blip.tv/"
    """The URL accepting multipart video uploads"""

    user_agent: str = "bliptv-python"
    """The User-Agent header sent with every request"""

    timeout: float = 30.0
    """The timeout in seconds for a single request"""

    envelope_prefix_length: int = 16
    """The length of the callback prefix wrapping JSON responses"""

    envelope_suffix_length: int = 3
    """The length of the callback suffix wrapping JSON responses"""

    def login_url(self, username: str, password: str) -> str:
        """Get the URL of the dashboard used to log in.

        :param username: The login of the user
        :param password: The password of the user
        :return: The login URL.
        """
        return (
            f"http://{self.domain}/dashboard/"
            f"?userlogin={quote(username, safe='')}&password={quote(password, safe='')}"
        )

    def user_posts_url(self, username: str, *, private: bool = False) -> str:
        """Get the URL listing the posts of a user.

        :param username: The login of the user
        :param private: Whether to use the listing visible to the logged in user.
        :return: The listing URL.
        """
        path = "posts" if private else "posts/"
        return (
            f"http://{username}.{self.domain}/{path}?skin={Skin.JSON.value}&version=2"
        )

    def search_url(self, search_string: str) -> str:
        """Get the URL searching for videos.

        :param search_string: The raw search terms
        :return: The search URL.
        """
        return (
            f"http://www.{self.domain}/search/"
            f"?search={quote(search_string, safe='')}&skin={Skin.JSON.value}"
        )

    @staticmethod
    def detail_url(url: str) -> str:
        """Get the URL of the JSON details of a video.

        :param url: The URL of the video post
        :return: The detail URL.
        """
        return f"{url}?skin={Skin.JSON.value}&version=2"

    def api_url(self, **params: str) -> str:
        """Get the URL of the legacy XML API.

        :param params: The query parameters, in order. Values are percent-encoded.
        :return: The API URL.
        """
        query = "&".join(
            f"{key}={quote(str(value), safe='')}" for key, value in params.items()
        )
        return f"http://www.{self.domain}/?{query}&skin={Skin.API.value}"
