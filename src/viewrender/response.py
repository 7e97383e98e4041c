"""Response sinks the renderer writes into.

The renderer only needs an object with a ``write(text)`` method. ``Response``
is a minimal in-memory implementation used by the CLI and tests; framework
response bodies (or any text stream) work just as well.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ResponseSink(Protocol):
    """Anything rendered output can be appended to."""

    def write(self, text: str) -> Any:
        """Append text to the body."""
        ...


@dataclass
class Response:
    """In-memory HTTP response with an appendable text body.

    Attributes:
        status_code: HTTP status code (100-599)
        headers: Response headers
        body: Accumulated body text
    """

    status_code: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""

    def __post_init__(self) -> None:
        """Validate the status code."""
        if not 100 <= self.status_code <= 599:
            raise ValueError(f"Invalid status code: {self.status_code}")

    @classmethod
    def html(cls, body: str = "", status: int = 200) -> "Response":
        """Create an HTML response."""
        return cls(
            status_code=status,
            headers={"Content-Type": "text/html; charset=utf-8"},
            body=body,
        )

    @classmethod
    def text(cls, body: str = "", status: int = 200) -> "Response":
        """Create a plain text response."""
        return cls(
            status_code=status,
            headers={"Content-Type": "text/plain; charset=utf-8"},
            body=body,
        )

    def write(self, text: str) -> int:
        """Append text to the body.

        Returns:
            Number of characters written
        """
        self.body += text
        return len(text)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "status_code": self.status_code,
            "headers": dict(self.headers),
            "body": self.body,
        }
