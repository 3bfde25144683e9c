from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .errors import ParseError
from .machine import Machine


def _parse_group(body: str, line_no: Optional[int], line: str) -> list[int]:
    indices = []
    for tok in body.split(","):
        tok = tok.strip()
        if not tok:
            continue
        try:
            indices.append(int(tok))
        except ValueError:
            raise ParseError(
                f"non-numeric button index {tok!r}", line_no, line
            ) from None
    return indices


def parse_line(line: str, line_no: Optional[int] = None) -> Machine:
    """Parse one machine line: ``[.##.] (3) (1,3) (2) {3,5,4,7}``.

    The bracketed pattern is the target ('#' = on). Every parenthesised group
    after it is one button listing the lights it toggles. The optional
    ``{...}`` section holds joltage requirements and is skipped.
    """
    start = line.find("[")
    if start < 0:
        raise ParseError("missing '['", line_no, line)
    end = line.find("]", start + 1)
    if end < 0:
        raise ParseError("missing ']'", line_no, line)
    pattern = line[start + 1 : end]

    buttons: List[list[int]] = []
    rest = line[end + 1 :]
    pos = 0
    while True:
        open_at = rest.find("(", pos)
        close_at = rest.find(")", pos)
        if open_at < 0:
            if close_at >= 0:
                raise ParseError("unmatched ')'", line_no, line)
            break
        if 0 <= close_at < open_at:
            raise ParseError("unmatched ')'", line_no, line)
        close_at = rest.find(")", open_at + 1)
        if close_at < 0:
            raise ParseError("unmatched '('", line_no, line)
        buttons.append(_parse_group(rest[open_at + 1 : close_at], line_no, line))
        pos = close_at + 1

    return Machine.from_pattern(pattern, buttons)


def parse_machines(text: str) -> list[Machine]:
    """Parse every non-blank line. Fails on the first malformed line."""
    machines = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        machines.append(parse_line(line, line_no))
    return machines


def read_machines(path: str | Path) -> list[Machine]:
    with open(path, "r", encoding="utf-8") as f:
        return parse_machines(f.read())
