"""Request target to filesystem path resolution."""

from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urlsplit

from errors import ErrorKind, Failure

ROOT_PREFIX = "./"
_FORBIDDEN_SEGMENT_CHARS = ("/", "\\", "\x00")


@dataclass(frozen=True, slots=True)
class ResolvedPath:
    """A sanitized path anchored at the served root.

    ``relative`` always starts with ``./`` and never contains empty, ``.`` or
    ``..`` segments. ``url_path`` is the same location as clients see it.
    """

    relative: str
    segments: tuple[str, ...]

    @property
    def url_path(self) -> str:
        return "/" + "/".join(self.segments)

    @property
    def is_root(self) -> bool:
        return not self.segments


def extract_target_path(raw_target: str) -> str | Failure:
    """Return the path component of a request target, dropping query and host."""
    if raw_target.startswith("/"):
        return raw_target.split("#", 1)[0].split("?", 1)[0]

    try:
        parts = urlsplit(raw_target)
    except ValueError as exc:
        return Failure(ErrorKind.INVALID_URL, f"Invalid URL: {exc}")

    if parts.scheme not in {"http", "https"} or not parts.netloc:
        return Failure(ErrorKind.INVALID_URL, f"Invalid URL: {raw_target!r}")
    return parts.path or "/"


def split_segments(path: str) -> list[str] | Failure:
    segments: list[str] = []
    for raw_segment in path.split("/"):
        if not raw_segment:
            continue
        try:
            segment = unquote(raw_segment, errors="strict")
        except UnicodeDecodeError:
            return Failure(ErrorKind.INVALID_URL, f"Invalid URL encoding in {raw_segment!r}")
        if not segment or any(char in segment for char in _FORBIDDEN_SEGMENT_CHARS):
            return Failure(ErrorKind.INVALID_URL, f"Invalid path segment {raw_segment!r}")

        if segment == ".":
            continue
        if segment == "..":
            # Clamped at the root.
            if segments:
                segments.pop()
            continue
        segments.append(segment)
    return segments


def resolve_request_path(raw_target: str) -> ResolvedPath | Failure:
    path = extract_target_path(raw_target)
    if isinstance(path, Failure):
        return path

    segments = split_segments(path)
    if isinstance(segments, Failure):
        return segments

    return ResolvedPath(
        relative=ROOT_PREFIX + "/".join(segments),
        segments=tuple(segments),
    )


def to_filesystem_path(root: Path, resolved: ResolvedPath) -> Path:
    return root.joinpath(*resolved.segments)
