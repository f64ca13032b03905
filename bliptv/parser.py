"""Contains the functions converting blip.tv response bodies into Python values.

List, search and detail endpoints answer with JSON wrapped in a constant length
callback envelope, while the legacy API answers with XML. The two shapes are
never mixed, so each one has its own parser.
"""

__all__ = ["parse_wrapped_json", "parse_xml"]

import json
from typing import Any

import xmltodict
from pyexpat import ExpatError

from bliptv.errors import MalformedResponseError
from bliptv.types import JSONValue


def parse_wrapped_json(
    body: str, *, prefix_length: int = 16, suffix_length: int = 3
) -> JSONValue:
    """Strip the callback envelope from a response body and parse the JSON inside.

    :param body: The raw response body
    :param prefix_length: The number of characters wrapping the payload at the start
    :param suffix_length: The number of characters wrapping the payload at the end
    :return: The parsed JSON value. An empty list is a valid result.
    :raises MalformedResponseError: If the body is too short to be wrapped or the
        payload is not valid JSON.
    """
    if len(body) < prefix_length + suffix_length:
        raise MalformedResponseError(
            f"Response is too short to contain a JSON payload: {body!r}"
        )

    payload = body[prefix_length : len(body) - suffix_length]

    try:
        return json.loads(payload)
    except ValueError as ex:
        raise MalformedResponseError(
            f"Response does not contain valid JSON: {payload[:200]!r}"
        ) from ex


def parse_xml(body: str | bytes) -> dict[str, Any]:
    """Parse an XML status response into a dictionary tree.

    :param body: The raw response body
    :return: The parsed document, keyed by the root element.
    :raises MalformedResponseError: If the body is not a valid XML document.
    """
    try:
        document = xmltodict.parse(body)
    except ExpatError as ex:
        raise MalformedResponseError(f"Response is not valid XML: {body!r}") from ex

    if not document:
        raise MalformedResponseError("Response is an empty XML document")

    return document
