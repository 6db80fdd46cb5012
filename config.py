"""Configuration constants for the directory-listing HTTP server."""

HOST: str = "0.0.0.0"
PORT: int = 8000
BUFFER_SIZE: int = 1024
READ_CHUNK_SIZE: int = 8192
SOCKET_TIMEOUT_SECS: int = 5
ACCEPT_TIMEOUT_SECS: float = 0.2
LISTEN_BACKLOG: int = 128
MAX_REQUEST_BYTES: int = 1_048_576
MAX_HEADER_BYTES: int = 16_384
MAX_BODY_BYTES: int = 524_288
MAX_TARGET_LENGTH: int = 8_192
WORKER_COUNT: int = 8
DEFAULT_ROOT: str = "."
INDEX_FILE: str = "index.html"
