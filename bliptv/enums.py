"""Defines Enum classes used in the package."""

__all__ = ["Skin"]

from enum import Enum


class Skin(Enum):
    """Enum for the response format requested from blip.tv."""

    JSON = "json"
    """JSON wrapped in a callback envelope"""

    API = "api"
    """XML status document of the legacy API"""

    XMLHTTPREQUEST = "xmlhttprequest"
    """XML document returned by the upload endpoint"""
