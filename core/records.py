"""CSV boundary: read verses in, render modernized verses and token indexes out.

Rendering returns strings; nothing is written until the whole pipeline has
succeeded, so a failed run never leaves a partial file behind.
"""

from __future__ import annotations

import csv
import io
import re
from collections.abc import Iterable
from pathlib import Path
from typing import NamedTuple

from core.errors import InputError, OutputError

CSV_HAS_HEADER_ROW = False

# UTF-8 BOM, plus the "»¿" left behind when one is decoded as Latin-1.
_BOM = re.compile(r"^(?:\ufeff|\u00bb\u00bf)", re.MULTILINE)


class Verse(NamedTuple):
    id: str
    text: str


def replace_bom(text: str) -> str:
    return _BOM.sub("", text)


def parse_verses(raw: str, headers: bool = CSV_HAS_HEADER_ROW) -> list[Verse]:
    """Parse two-column ``id,text`` CSV content.  Blank lines are ignored."""
    reader = csv.reader(io.StringIO(replace_bom(raw), newline=""))
    verses: list[Verse] = []
    skip_header = headers
    try:
        for row in reader:
            if not row:
                continue
            if skip_header:
                skip_header = False
                continue
            if len(row) != 2:
                raise InputError(
                    f"line {reader.line_num}: expected 2 fields (id, text), got {len(row)}"
                )
            verses.append(Verse(row[0], row[1]))
    except csv.Error as e:
        raise InputError(f"line {reader.line_num}: {e}") from e
    return verses


def read_verses(path: str, headers: bool = CSV_HAS_HEADER_ROW) -> list[Verse]:
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        raise InputError(f"Input file not found: {path}")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Could not read {path}: {e}") from e
    try:
        return parse_verses(raw, headers)
    except InputError as e:
        raise InputError(f"{path}: {e}") from e


def _render(header: list[str], rows: Iterable[list]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return buf.getvalue()


def render_modernized(verses: Iterable[Verse]) -> str:
    """``id,text`` CSV.  The header is always written; rows without an id are dropped."""
    return _render(["id", "text"], ([v.id, v.text] for v in verses if v.id))


def render_tokens(entries: Iterable) -> str:
    """``token,verses,ids`` CSV, with ids written as a ``[a,b,c]`` list."""
    return _render(
        ["token", "verses", "ids"],
        ([e.token, e.count, f"[{','.join(e.verse_ids)}]"] for e in entries),
    )


def write_text(path: str, content: str) -> None:
    try:
        Path(path).write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"Could not write {path}: {e}") from e
