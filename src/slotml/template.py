"""Template sources: splitting ``${...}`` marked text into segments and slots."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from slotml.tokens import Position


@dataclass(frozen=True, slots=True)
class Template:
    """Literal segments plus the source text they were taken from.

    ``starts[i]`` is the offset of ``segments[i]`` in ``source``;
    ``escapes[i]`` lists the segment offsets of literal ``${`` written as
    ``\\${`` in the source (one source character dropped at each).
    """

    segments: tuple[str, ...]
    expressions: tuple[str, ...]
    source: str
    starts: tuple[int, ...]
    escapes: tuple[tuple[int, ...], ...]

    @property
    def slot_count(self) -> int:
        return len(self.segments) - 1

    @classmethod
    def from_segments(cls, segments: Sequence[str]) -> Template:
        """Build a template from bare segments, marking slot i as ``${i}``."""
        parts: list[str] = []
        starts: list[int] = []
        offset = 0
        for i, seg in enumerate(segments):
            if i:
                marker = f"${{{i - 1}}}"
                parts.append(marker)
                offset += len(marker)
            starts.append(offset)
            parts.append(seg)
            offset += len(seg)
        count = max(len(segments) - 1, 0)
        return cls(
            segments=tuple(segments),
            expressions=tuple(str(i) for i in range(count)),
            source="".join(parts),
            starts=tuple(starts),
            escapes=tuple(() for _ in segments),
        )

    def locate(self, segment: int, offset: int) -> Position:
        """Map a (segment, offset) pair from a token to a source Position."""
        if segment >= len(self.starts):
            return self.end_position()
        shift = sum(1 for e in self.escapes[segment] if e <= offset)
        return self._position_at(self.starts[segment] + offset + shift)

    def end_position(self) -> Position:
        return self._position_at(len(self.source))

    def _position_at(self, offset: int) -> Position:
        offset = min(offset, len(self.source))
        line = self.source.count("\n", 0, offset) + 1
        line_start = self.source.rfind("\n", 0, offset) + 1
        return Position(line, offset - line_start + 1, offset)


def split_template(text: str) -> Template:
    """Split text at ``${...}`` markers into a Template.

    Markers are brace-balanced; ``\\${`` is a literal ``${``. An unterminated
    marker is kept as literal text.
    """
    segments: list[str] = []
    expressions: list[str] = []
    starts: list[int] = [0]
    escapes: list[tuple[int, ...]] = []

    buf: list[str] = []
    buf_len = 0
    seg_escapes: list[int] = []
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]

        if ch == "\\" and text.startswith("${", i + 1):
            seg_escapes.append(buf_len)
            buf.append("${")
            buf_len += 2
            i += 3
            continue

        if ch == "$" and text.startswith("{", i + 1):
            end = _find_marker_end(text, i + 2)
            if end == -1:
                buf.append(text[i:])
                buf_len += n - i
                break
            segments.append("".join(buf))
            escapes.append(tuple(seg_escapes))
            expressions.append(text[i + 2 : end].strip())
            starts.append(end + 1)
            buf = []
            buf_len = 0
            seg_escapes = []
            i = end + 1
            continue

        buf.append(ch)
        buf_len += 1
        i += 1

    segments.append("".join(buf))
    escapes.append(tuple(seg_escapes))

    return Template(
        segments=tuple(segments),
        expressions=tuple(expressions),
        source=text,
        starts=tuple(starts),
        escapes=tuple(escapes),
    )


def _find_marker_end(text: str, start: int) -> int:
    """Return the index of the '}' closing a marker body starting at start."""
    depth = 1
    for j in range(start, len(text)):
        ch = text[j]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return j
    return -1
