"""Header parsing and signature helpers."""

from .header import parse_header, resolve_scheme
from .signature import (
    build_signed_payload,
    compute_signature,
    generate_header,
    secure_compare
)

__all__ = [
    "parse_header",
    "resolve_scheme",
    "build_signed_payload",
    "compute_signature",
    "generate_header",
    "secure_compare"
]
