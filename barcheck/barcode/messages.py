"""
Failure messages and placeholder substitution.
"""

import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from barcheck.models.outcome import FailureCode

DEFAULT_MESSAGE_TEMPLATES: Mapping[FailureCode, str] = MappingProxyType({
    FailureCode.FAILED: "The input failed checksum validation",
    FailureCode.INVALID_CHARS: "The input contains invalid characters",
    FailureCode.INVALID_LENGTH: "The input should have a length of %length% characters",
    FailureCode.INVALID: "Invalid type given. String expected",
})

_PLACEHOLDER = re.compile(r"%(\w+)%")


def render_message(template: str, variables: Mapping[str, str]) -> str:
    """
    Replace ``%name%`` placeholders with values from ``variables``.

    Unknown placeholders are left as they are.
    """
    return _PLACEHOLDER.sub(lambda m: variables.get(m.group(1), m.group(0)), template)


def describe_length(length: Any) -> str:
    """
    Render an adapter's expected length for messages.

    Accepts the built-in length specs as well as plain ints, strings and
    iterables of ints returned by custom adapters.
    """
    describe = getattr(length, "describe", None)
    if callable(describe):
        return str(describe())
    if isinstance(length, (str, int)):
        return str(length)
    if isinstance(length, Iterable):
        return "/".join(str(item) for item in length)
    return str(length)
