"""HTTP response model and serializer."""

from dataclasses import dataclass, field

REASON_PHRASES: dict[int, str] = {
    200: "OK",
    400: "Bad Request",
    404: "Not Found",
    408: "Request Timeout",
    413: "Payload Too Large",
    414: "URI Too Long",
    431: "Request Header Fields Too Large",
    500: "Internal Server Error",
    501: "Not Implemented",
    505: "HTTP Version Not Supported",
}

DEFAULT_CONTENT_TYPE = "text/plain; charset=utf-8"


@dataclass(slots=True)
class HTTPResponse:
    status_code: int
    reason_phrase: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | str = b""

    def __post_init__(self) -> None:
        if isinstance(self.body, str):
            self.body = self.body.encode("utf-8")

    @property
    def reason(self) -> str:
        return self.reason_phrase or REASON_PHRASES.get(self.status_code, "Unknown")

    def head_bytes(self) -> bytes:
        normalized_headers = dict(self.headers)
        normalized_headers.setdefault("Content-Type", DEFAULT_CONTENT_TYPE)
        normalized_headers["Content-Length"] = str(len(self.body))

        header_lines = [f"HTTP/1.1 {self.status_code} {self.reason}"]
        header_lines.extend(f"{key}: {value}" for key, value in normalized_headers.items())
        return "\r\n".join(header_lines).encode("iso-8859-1") + b"\r\n\r\n"

    def to_bytes(self) -> bytes:
        """Serialize the response into HTTP/1.1 wire format bytes."""
        return self.head_bytes() + self.body


def plain_response(status_code: int, body: str | None = None) -> HTTPResponse:
    """Plain text response whose body defaults to the reason phrase."""
    response = HTTPResponse(status_code=status_code)
    response.body = (body if body is not None else response.reason).encode("utf-8")
    return response
