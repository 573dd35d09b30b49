"""Signature header parsing."""

import re
from typing import Any, Union

from ..errors import UnsupportedSchemeError
from ..types import HeaderScheme, SignedHeader

TIMESTAMP_KEY = "t"
TIMESTAMP_PATTERN = re.compile(r"-?[0-9]+")


def resolve_scheme(scheme: Union[HeaderScheme, str]) -> HeaderScheme:
    """Look up a scheme by member or tag, rejecting anything unsupported."""
    try:
        return HeaderScheme(scheme)
    except ValueError:
        raise UnsupportedSchemeError(f"Unrecognized header scheme: '{scheme}'") from None


def parse_header(
    header: Any,
    scheme: Union[HeaderScheme, str] = HeaderScheme.V1
) -> SignedHeader:
    """
    Decode a ``t=<timestamp>,v1=<signature>`` header.

    Args:
        header: Raw header value; anything other than ``str`` yields an
            empty result
        scheme: Signature scheme whose values are collected

    Returns:
        SignedHeader with ``timestamp=None`` when no usable ``t`` was found

    Raises:
        UnsupportedSchemeError: If ``scheme`` is not supported
    """
    if not isinstance(header, str):
        return SignedHeader()

    tag = resolve_scheme(scheme).value
    details = SignedHeader()

    for item in header.split(","):
        key, sep, value = item.partition("=")
        if not sep:
            continue

        if key == TIMESTAMP_KEY:
            if TIMESTAMP_PATTERN.fullmatch(value):
                details.timestamp = int(value, 10)
            else:
                details.timestamp = None
        elif key == tag:
            details.signatures.append(value)

    return details
