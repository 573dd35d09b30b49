"""Type definitions for webhook signature verification."""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class HeaderScheme(str, Enum):
    """Signature schemes understood by the header parser."""
    V1 = "v1"


@dataclass
class SignedHeader:
    """Timestamp and candidate signatures decoded from a signature header."""
    timestamp: Optional[int] = None
    signatures: List[str] = field(default_factory=list)


@dataclass
class WebhookEvent:
    """Verified webhook delivery."""
    timestamp: int
    signatures: List[str]
    body: str

    def json(self) -> Any:
        """Decode the body as JSON."""
        return json.loads(self.body)
