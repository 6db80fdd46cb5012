"""HTML directory index rendering."""

import html
import os
import stat
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from urllib.parse import quote

from config import INDEX_FILE
from sizes import human_file_size

FOLDER_GLYPH = "\U0001F4C1"
FILE_GLYPH = "\U0001F4C4"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

PAGE_STYLE = """body {font-family: monospace;}
    th {text-align: left; padding-bottom: 10px}
    td {padding-right: 40px}
    a {text-decoration: none}"""

HEADER_ROW = "<tr><th>Name</th><th>Last modified</th><th>Size</th></tr>"


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    name: str
    is_dir: bool
    modified: datetime
    size: int

    @property
    def is_hidden(self) -> bool:
        return self.name.startswith(".")

    @property
    def display_size(self) -> str:
        return "-" if self.is_dir else human_file_size(self.size)

    @property
    def display_modified(self) -> str:
        return self.modified.strftime(TIMESTAMP_FORMAT)


def build_document(title: str, body: str) -> str:
    return "\n".join(
        [
            "<html>",
            f"<head><title>{html.escape(title)}</title><style>{PAGE_STYLE}</style></head>",
            f"<body>{body}</body>",
            "</html>",
        ]
    )


def list_directory(directory: Path) -> list[DirectoryEntry]:
    """Return the direct children of ``directory``, sorted by name.

    Metadata is read without following symlinks. Hidden entries are included;
    the caller decides whether to show them.
    """
    entries: list[DirectoryEntry] = []
    with os.scandir(directory) as iterator:
        for item in iterator:
            item_stat = item.stat(follow_symlinks=False)
            entries.append(
                DirectoryEntry(
                    name=item.name,
                    is_dir=stat.S_ISDIR(item_stat.st_mode),
                    modified=datetime.fromtimestamp(item_stat.st_mtime, tz=timezone.utc),
                    size=item_stat.st_size,
                )
            )
    entries.sort(key=lambda entry: entry.name)
    return entries


def entry_href(url_path: str, name: str) -> str:
    separator = "" if url_path.endswith("/") else "/"
    return quote(f"{url_path}{separator}{name}")


def render_row(url_path: str, entry: DirectoryEntry) -> str:
    glyph = FOLDER_GLYPH if entry.is_dir else FILE_GLYPH
    return (
        "<tr>\n"
        f'        <td>{glyph} <a href="{entry_href(url_path, entry.name)}">'
        f"{html.escape(entry.name)}</a></td>\n"
        f"        <td>{entry.display_modified}</td>\n"
        f"        <td>{entry.display_size}</td>\n"
        "      </tr>"
    )


def render_listing(url_path: str, entries: list[DirectoryEntry]) -> str:
    title = f"Index of {url_path}"
    lines = [f"<h1>{html.escape(title)}</h1>", "<table>" + HEADER_ROW]
    lines.extend(render_row(url_path, entry) for entry in entries if not entry.is_hidden)
    lines.append("</table>")
    return build_document(title, "\n".join(lines))


def render_directory(directory: Path, url_path: str) -> bytes:
    """Return the directory's own index.html, or a generated listing page.

    Raises OSError when the directory cannot be listed or read.
    """
    index_path = directory / INDEX_FILE
    if index_path.is_file():
        return index_path.read_bytes()

    entries = list_directory(directory)
    return render_listing(url_path, entries).encode("utf-8")
