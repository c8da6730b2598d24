from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from .errors import ParseError

DELIMITER = ","


@dataclass(frozen=True)
class VocabularyRow:
    index: int
    source: str
    target: str


def split_line(line: str, delimiter: str = DELIMITER) -> Optional[Tuple[str, str]]:
    """Split at the first delimiter outside parentheses.

    "hello, world (a, b), rest" -> ("hello", "world (a, b), rest")
    Returns None when the line has no such delimiter.
    """
    depth = 0
    for pos, char in enumerate(line):
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        elif char == delimiter and depth == 0:
            return line[:pos].strip(), line[pos + 1 :].strip()
    return None


def _is_header(line: str, header: Optional[Sequence[str]]) -> bool:
    if not header:
        return False
    pair = split_line(line)
    if pair is None:
        return False
    return tuple(p.lower() for p in pair) == tuple(h.lower() for h in header)


def parse_vocabulary(text: str, header: Optional[Sequence[str]] = ("German", "English")) -> List[VocabularyRow]:
    """Parse a two-column word list into rows, skipping blank and malformed lines."""
    lines = text.strip().splitlines()
    if lines and _is_header(lines[0].strip(), header):
        lines = lines[1:]

    rows: List[VocabularyRow] = []
    for line in lines:
        line = line.strip()
        if not line:
            continue
        pair = split_line(line)
        if pair is None:
            print(f"WARN: No delimiter found in line: {line}", file=sys.stderr)
            continue
        rows.append(VocabularyRow(len(rows), *pair))
    return rows


def read_vocabulary(path, header: Optional[Sequence[str]] = ("German", "English")) -> List[VocabularyRow]:
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseError(f"Cannot read vocabulary file {path}: {exc}") from exc
    return parse_vocabulary(text, header)


def format_vocabulary(rows: Iterable[VocabularyRow], header: Optional[Sequence[str]] = ("German", "English")) -> str:
    """Serialize rows back into the input format (header line first if given)."""
    lines = []
    if header:
        lines.append(DELIMITER.join(header))
    lines.extend(f"{row.source}{DELIMITER}{row.target}" for row in rows)
    return "\n".join(lines) + "\n"
