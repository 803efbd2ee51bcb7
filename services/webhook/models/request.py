from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class RequestSpec:
    """
    Outbound request derived from the job parameters and secrets.

    Built fresh for every invocation, never persisted.
    """

    method: str  # Uppercased HTTP verb
    url: str  # Resolved absolute URL
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None  # Literal outgoing body text

    def encoded_headers(self) -> List[Tuple[bytes, bytes]]:
        """Headers as Latin-1 bytes; httpx encodes plain str headers as ASCII."""
        return [
            (name.encode("latin-1"), value.encode("latin-1"))
            for name, value in self.headers.items()
        ]
