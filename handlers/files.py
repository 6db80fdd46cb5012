"""Serve files and directory listings from the served root."""

import logging
from pathlib import Path

from content_types import HTML_CONTENT_TYPE, get_content_type
from errors import ErrorKind, Failure
from listing import render_directory
from paths import ResolvedPath, resolve_request_path, to_filesystem_path
from request import HTTPRequest
from response import HTTPResponse, plain_response

logger = logging.getLogger(__name__)

NOT_FOUND_BODY = "Not found"
INTERNAL_ERROR_PREFIX = "Internal Server Error\n\n"

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_URL: 500,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.FILESYSTEM: 500,
}


def failure_response(failure: Failure) -> HTTPResponse:
    status_code = STATUS_BY_KIND[failure.kind]
    if failure.kind is ErrorKind.NOT_FOUND:
        return plain_response(status_code, NOT_FOUND_BODY)
    return plain_response(status_code, INTERNAL_ERROR_PREFIX + failure.detail)


def internal_error_response(exc: BaseException) -> HTTPResponse:
    return plain_response(500, f"{INTERNAL_ERROR_PREFIX}{exc.__class__.__name__}: {exc}")


def locate(root: Path, resolved: ResolvedPath) -> tuple[Path, bool] | Failure:
    """Find the resolved path on disk and report whether it is a directory."""
    fs_path = to_filesystem_path(root, resolved)
    try:
        if not fs_path.exists():
            return Failure(ErrorKind.NOT_FOUND, resolved.url_path)
        return fs_path, fs_path.is_dir()
    except OSError as exc:
        return Failure.from_os_error(exc)


def read_body(fs_path: Path, resolved: ResolvedPath, is_dir: bool) -> tuple[bytes, str] | Failure:
    try:
        if is_dir:
            return render_directory(fs_path, resolved.url_path), HTML_CONTENT_TYPE
        return fs_path.read_bytes(), get_content_type(fs_path.name)
    except OSError as exc:
        return Failure.from_os_error(exc)


def serve_path(request: HTTPRequest, root: Path) -> HTTPResponse:
    """Answer any request method by reading the target under ``root``."""
    logger.info("%s %s", request.method, request.raw_target)

    resolved = resolve_request_path(request.raw_target)
    if isinstance(resolved, Failure):
        return failure_response(resolved)

    located = locate(root, resolved)
    if isinstance(located, Failure):
        return failure_response(located)
    fs_path, is_dir = located

    content = read_body(fs_path, resolved, is_dir)
    if isinstance(content, Failure):
        return failure_response(content)
    body, content_type = content

    return HTTPResponse(
        status_code=200,
        headers={"Content-Type": content_type},
        body=body,
    )
