"""Error types with formatted source context."""

from __future__ import annotations

from slotml.tokens import Position, Token, TokenType


class ParseError(Exception):
    """Raised on the first parse error, with the unmet expectation and source context.

    ``expected`` is the token type the grammar required (None when no single
    type applies) and ``found`` the token actually present (None at end of
    input).
    """

    def __init__(
        self,
        message: str,
        expected: TokenType | None,
        found: Token | None,
        position: Position,
        source: str,
    ) -> None:
        self.message = message
        self.expected = expected
        self.found = found
        self.position = position
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "<template>") -> str:
        lines = self.source.splitlines(keepends=True)
        line_idx = self.position.line - 1
        col = self.position.column

        # Build the source line (strip trailing newline for display)
        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Underline the offending token, at least 1 char, within the line
        width = token_width(self.found)
        underline_len = max(1, min(width, len(source_line) - col + 1))

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


def token_width(token: Token | None) -> int:
    """Number of source characters the token covers, at least 1."""
    if token is None or token.is_slot:
        return 1
    return max(1, len(token.value))
