"""Minimal LSP server for slotml templates, diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from slotml import __version__
from slotml.config import ParseOptions
from slotml.errors import ParseError, token_width
from slotml.parser import parse_template

server = LanguageServer(
    "slotml-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)

# Editors mostly hold HTML-flavoured templates
OPTIONS = ParseOptions.html()


def _validate(ls: LanguageServer, uri: str, options: ParseOptions = OPTIONS) -> None:
    """Parse the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    try:
        parse_template(doc.source, options)
    except ParseError as exc:
        line = exc.position.line - 1
        col = exc.position.column - 1
        width = token_width(exc.found)
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line, character=col),
                    end=Position(line=line, character=col + width),
                ),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="slotml",
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
