"""Parser for tag markup with interpolation slots."""

from __future__ import annotations

from typing import TYPE_CHECKING

from slotml.config import ParseOptions
from slotml.errors import ParseError
from slotml.lexer import tokenize
from slotml.parser import parse, parse_template
from slotml.render import render
from slotml.serialize import to_data
from slotml.template import Template, split_template

if TYPE_CHECKING:
    from collections.abc import Sequence

    from slotml.ast import Root

__version__ = "0.1.0"

__all__ = [
    "ParseError",
    "ParseOptions",
    "Template",
    "html",
    "parse",
    "parse_template",
    "render",
    "split_template",
    "to_data",
    "tokenize",
]


def html(segments: Sequence[str], *values: object, options: ParseOptions | None = None) -> Root:
    """Parse segments given alongside their slot values, tagged-template style.

    The values are only counted; they never reach the parser.
    """
    return parse(segments, len(values), options)
