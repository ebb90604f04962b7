from __future__ import annotations

import csv
from dataclasses import dataclass
from io import StringIO
from typing import List, Union

from core.errors import CsvDecodeError, EmptyFileError


@dataclass(frozen=True)
class ParsedCsv:
    header: List[str]
    rows: List[List[str]]


def _is_blank(row: List[str]) -> bool:
    return all(cell.strip() == "" for cell in row)


def read_csv(content: Union[str, bytes]) -> ParsedCsv:
    """Split a CSV export into header + non-blank data rows.

    Raises EmptyFileError when the file holds no records at all and
    CsvDecodeError when the bytes are not UTF-8.
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise CsvDecodeError() from e
    elif content.startswith("\ufeff"):
        content = content[1:]

    records = list(csv.reader(StringIO(content)))
    if all(_is_blank(r) for r in records):
        raise EmptyFileError()

    header = [h.strip() for h in records[0]]
    rows = [r for r in records[1:] if not _is_blank(r)]
    return ParsedCsv(header=header, rows=rows)
