from __future__ import annotations

"""
A minimal pygls-based Language Server for LispFlat.

Features:
- Diagnostics: stray/unclosed parens, wrong operand counts for special forms
- Hover: primitive and special form signatures, top-level definitions
- Completion: primitives, special forms and top-level definitions
- Document Symbols: top-level defines

Note: We avoid evaluating the buffer. We build a static index per document.
"""

import logging
from typing import Dict, List, Optional

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)

from lispflat import __version__
from lispflat_lsp.indexer import (
    BUILTIN_SIGNATURES,
    SPECIAL_FORM_SIGNATURES,
    DocumentIndex,
    build_index,
    extract_word_at,
)

logger = logging.getLogger(__name__)


class LispFlatLanguageServer(LanguageServer):
    CMD_NAME = "lispflat-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__)
        self.indexes: Dict[str, DocumentIndex] = {}

    def reindex(self, uri: str) -> DocumentIndex:
        text = self.workspace.get_text_document(uri).source
        idx = build_index(text)
        self.indexes[uri] = idx
        logger.debug("indexed %s: %d symbols, %d problems", uri, len(idx.symbols), len(idx.problems))
        return idx


ls = LispFlatLanguageServer()


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LispFlatLanguageServer, params: DidOpenTextDocumentParams):
    uri = params.text_document.uri
    _publish_diagnostics(ls, uri, ls.reindex(uri))


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LispFlatLanguageServer, params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    _publish_diagnostics(ls, uri, ls.reindex(uri))


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: LispFlatLanguageServer, params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.indexes.pop(uri, None)
    ls.publish_diagnostics(uri, [])


# --- Diagnostics ---
def to_diagnostics(idx: DocumentIndex) -> List[Diagnostic]:
    return [
        Diagnostic(
            range=Range(
                start=Position(line=p.line, character=p.col),
                end=Position(line=p.line, character=p.col + p.length),
            ),
            message=p.message,
            severity=DiagnosticSeverity.Error,
            source=LispFlatLanguageServer.CMD_NAME,
        )
        for p in idx.problems
    ]


def _publish_diagnostics(ls: LispFlatLanguageServer, uri: str, idx: DocumentIndex):
    ls.publish_diagnostics(uri, to_diagnostics(idx))


# --- Hover ---
def hover_text(idx: DocumentIndex, word: str) -> Optional[str]:
    if word in SPECIAL_FORM_SIGNATURES:
        return f"{SPECIAL_FORM_SIGNATURES[word]} (special form)"
    if word in BUILTIN_SIGNATURES:
        return f"{BUILTIN_SIGNATURES[word]} (primitive)"
    if word in idx.symbols:
        sdef = idx.symbols[word]
        return f"{sdef.signature} (defined at {sdef.line + 1}:{sdef.col + 1})"
    return None


@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(ls: LispFlatLanguageServer, params: HoverParams) -> Optional[Hover]:
    uri = params.text_document.uri
    idx = ls.indexes.get(uri)
    if idx is None:
        return None
    text = ls.workspace.get_text_document(uri).source
    word, _ = extract_word_at(text, params.position.line, params.position.character)
    contents = hover_text(idx, word) if word else None
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
def completion_items(idx: Optional[DocumentIndex]) -> List[CompletionItem]:
    items: List[CompletionItem] = []
    for name, sig in SPECIAL_FORM_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Keyword, detail=sig))
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    if idx is not None:
        for name, sdef in idx.symbols.items():
            kind = CompletionItemKind.Function if sdef.kind == "function" else CompletionItemKind.Variable
            items.append(CompletionItem(label=name, kind=kind, detail=sdef.signature))
    return items


@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["("]))
def on_completion(ls: LispFlatLanguageServer, params: CompletionParams) -> CompletionList:
    idx = ls.indexes.get(params.text_document.uri)
    return CompletionList(is_incomplete=False, items=completion_items(idx))


# --- Document Symbols ---
@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(
    ls: LispFlatLanguageServer, params: DocumentSymbolParams
) -> Optional[List[DocumentSymbol]]:
    idx = ls.indexes.get(params.text_document.uri)
    if idx is None:
        return None
    symbols: List[DocumentSymbol] = []
    for name, sdef in idx.symbols.items():
        rng = Range(
            start=Position(line=sdef.line, character=sdef.col),
            end=Position(line=sdef.line, character=sdef.col + len(name)),
        )
        symbols.append(
            DocumentSymbol(
                name=name,
                kind=SymbolKind.Function if sdef.kind == "function" else SymbolKind.Variable,
                range=rng,
                selection_range=rng,
                detail=sdef.signature,
            )
        )
    return symbols


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
