"""Contains type hints for the library."""

__all__ = [
    "Attributes",
    "Headers",
    "JSONValue",
]

from collections.abc import Mapping
from typing import Any

Attributes = Mapping[str, Any]
Headers = Mapping[str, str]
JSONValue = Any
