"""Unit tests for the file and directory request dispatcher."""

import logging
from pathlib import Path

import pytest

import handlers.files as files
from errors import ErrorKind, Failure
from handlers.files import failure_response, serve_path
from request import HTTPRequest


def _build_request(target: str, method: str = "GET") -> HTTPRequest:
    return HTTPRequest(
        method=method,
        raw_target=target,
        http_version="HTTP/1.1",
        headers={"host": "localhost"},
    )


@pytest.fixture
def site(tmp_path: Path) -> Path:
    (tmp_path / "hello.txt").write_text("hello world")
    (tmp_path / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "guide.md").write_text("# Guide")
    (tmp_path / "blog").mkdir()
    (tmp_path / "blog" / "index.html").write_bytes(b"<h1>Blog</h1>")
    return tmp_path


def test_serves_file_bytes_with_content_type(site: Path) -> None:
    response = serve_path(_build_request("/hello.txt"), site)

    assert response.status_code == 200
    assert response.headers["Content-Type"] == "text/plain"
    assert response.body == b"hello world"


def test_binary_file_is_served_verbatim(site: Path) -> None:
    response = serve_path(_build_request("/logo.png?v=2"), site)

    assert response.status_code == 200
    assert response.headers["Content-Type"] == "image/png"
    assert response.body == b"\x89PNG\r\n\x1a\n"


def test_missing_path_returns_404(site: Path) -> None:
    response = serve_path(_build_request("/does-not-exist.css"), site)

    assert response.status_code == 404
    assert response.body == b"Not found"


def test_directory_returns_listing(site: Path) -> None:
    response = serve_path(_build_request("/docs/"), site)

    assert response.status_code == 200
    assert response.headers["Content-Type"] == "text/html; charset=utf-8"
    assert b"<h1>Index of /docs</h1>" in response.body
    assert b'<a href="/docs/guide.md">guide.md</a>' in response.body


def test_directory_with_index_html_returns_its_bytes(site: Path) -> None:
    response = serve_path(_build_request("/blog"), site)

    assert response.status_code == 200
    assert response.headers["Content-Type"] == "text/html; charset=utf-8"
    assert response.body == b"<h1>Blog</h1>"


def test_root_listing(site: Path) -> None:
    response = serve_path(_build_request("/"), site)

    assert b"<h1>Index of /</h1>" in response.body
    assert b'<a href="/hello.txt">hello.txt</a>' in response.body


@pytest.mark.parametrize("method", ["POST", "DELETE", "HEAD"])
def test_every_method_is_treated_as_read(site: Path, method: str) -> None:
    response = serve_path(_build_request("/hello.txt", method=method), site)

    assert response.status_code == 200
    assert response.body == b"hello world"


def test_traversal_stays_inside_root(tmp_path: Path) -> None:
    root = tmp_path / "public"
    root.mkdir()
    (tmp_path / "secret.txt").write_text("top secret")

    response = serve_path(_build_request("/../secret.txt"), root)

    assert response.status_code == 404


def test_invalid_url_returns_500_with_detail(site: Path) -> None:
    response = serve_path(_build_request("http://[::1/x"), site)

    assert response.status_code == 500
    assert response.body.startswith(b"Internal Server Error\n\n")
    assert b"Invalid URL" in response.body


def test_filesystem_error_returns_500(site: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _denied(_directory: Path, _url_path: str) -> bytes:
        raise PermissionError(13, "Permission denied", str(site / "docs"))

    monkeypatch.setattr(files, "render_directory", _denied)

    response = serve_path(_build_request("/docs"), site)

    assert response.status_code == 500
    assert response.body.startswith(b"Internal Server Error\n\n")
    assert b"Permission denied" in response.body


def test_request_is_logged(site: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="handlers.files"):
        serve_path(_build_request("/hello.txt?x=1", method="GET"), site)

    assert "GET /hello.txt?x=1" in caplog.messages


@pytest.mark.parametrize(
    ("kind", "status_code"),
    [
        (ErrorKind.INVALID_URL, 500),
        (ErrorKind.NOT_FOUND, 404),
        (ErrorKind.FILESYSTEM, 500),
    ],
)
def test_failure_kind_maps_to_status(kind: ErrorKind, status_code: int) -> None:
    assert failure_response(Failure(kind, "detail")).status_code == status_code
