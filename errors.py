"""Error kinds returned by the request-handling steps."""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    INVALID_URL = "invalid_url"
    NOT_FOUND = "not_found"
    FILESYSTEM = "filesystem"


@dataclass(frozen=True, slots=True)
class Failure:
    """A failed step: what went wrong and a description safe to show clients."""

    kind: ErrorKind
    detail: str = ""

    @classmethod
    def from_os_error(cls, exc: OSError) -> "Failure":
        return cls(kind=ErrorKind.FILESYSTEM, detail=str(exc))
