"""Parse options and the HTML element tables they can be built from."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

# Elements that never have children: https://html.spec.whatwg.org/#void-elements
HTML_VOID_ELEMENTS: frozenset[str] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Elements whose body is unparsed text
HTML_RAW_TEXT_ELEMENTS: frozenset[str] = frozenset(
    {
        "script",
        "style",
        "textarea",
        "title",
    }
)


@dataclass(frozen=True, slots=True)
class ParseOptions:
    """Caller-owned parse configuration.

    The defaults give the core behavior: every tag must be self-closed or
    explicitly closed, closing names are not checked, and whitespace-only
    text at the edges of a child list or next to an element is dropped.
    Element names are matched exactly.
    """

    void_elements: frozenset[str] = field(default_factory=frozenset)
    raw_text_elements: frozenset[str] = field(default_factory=frozenset)
    strict_closing: bool = False
    preserve_whitespace: bool = False

    @classmethod
    def html(cls, *, strict_closing: bool = False, preserve_whitespace: bool = False) -> ParseOptions:
        """Options using the HTML void and raw-text element tables."""
        return cls(
            void_elements=HTML_VOID_ELEMENTS,
            raw_text_elements=HTML_RAW_TEXT_ELEMENTS,
            strict_closing=strict_closing,
            preserve_whitespace=preserve_whitespace,
        )

    @classmethod
    def build(
        cls,
        *,
        html: bool = False,
        void_elements: Iterable[str] = (),
        raw_text_elements: Iterable[str] = (),
        strict_closing: bool = False,
        preserve_whitespace: bool = False,
    ) -> ParseOptions:
        """Combine the optional HTML tables with extra element names."""
        void = set(void_elements)
        raw = set(raw_text_elements)
        if html:
            void |= HTML_VOID_ELEMENTS
            raw |= HTML_RAW_TEXT_ELEMENTS
        return cls(
            void_elements=frozenset(void),
            raw_text_elements=frozenset(raw),
            strict_closing=strict_closing,
            preserve_whitespace=preserve_whitespace,
        )
