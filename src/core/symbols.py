"""
Symbols - top-level function extraction from TypeScript trees

Each node type maps to one DeclarationKind, each kind to one matcher.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, List, NamedTuple, Optional, Tuple

import tree_sitter

from .errors import source_syntax_error
from .languages import DEFAULT_LANGUAGE, get_parser

logger = logging.getLogger(__name__)

ANONYMOUS = "anonymous"

FUNCTION_DECLARATION_TYPES = frozenset({"function_declaration", "generator_function_declaration"})
FUNCTION_VALUE_TYPES = frozenset({"function_expression", "function", "generator_function", "arrow_function"})


class ByteRange(NamedTuple):
    start: int
    end: int


@dataclass(frozen=True)
class SymbolRecord:
    """A function-like declaration and its half-open byte span."""

    name: str
    start_offset: int
    end_offset: int

    @property
    def range(self) -> ByteRange:
        return ByteRange(self.start_offset, self.end_offset)

    def to_dict(self) -> Dict[str, object]:
        return {"name": self.name, "start_offset": self.start_offset, "end_offset": self.end_offset}


class DeclarationKind(Enum):
    FUNCTION = "function"
    FUNCTION_VARIABLE = "function_variable"
    CLASS_METHODS = "class_methods"
    EXPORTED_FUNCTION = "exported_function"


DECLARATION_KINDS: Dict[str, DeclarationKind] = {
    "function_declaration": DeclarationKind.FUNCTION,
    "generator_function_declaration": DeclarationKind.FUNCTION,
    "lexical_declaration": DeclarationKind.FUNCTION_VARIABLE,
    "variable_declaration": DeclarationKind.FUNCTION_VARIABLE,
    "class_declaration": DeclarationKind.CLASS_METHODS,
    "abstract_class_declaration": DeclarationKind.CLASS_METHODS,
    "export_statement": DeclarationKind.EXPORTED_FUNCTION,
}


def _text(node: tree_sitter.Node) -> str:
    return node.text.decode("utf-8", errors="replace")


def _declared_name(node: tree_sitter.Node) -> str:
    name = node.child_by_field_name("name")
    return _text(name) if name is not None else ANONYMOUS


def _span(name: str, node: tree_sitter.Node) -> SymbolRecord:
    return SymbolRecord(name, node.start_byte, node.end_byte)


def _match_function(node: tree_sitter.Node) -> Iterator[SymbolRecord]:
    yield _span(_declared_name(node), node)


def _match_function_variable(node: tree_sitter.Node) -> Iterator[SymbolRecord]:
    # The whole statement is the span, even with several declarators
    for declarator in node.named_children:
        if declarator.type != "variable_declarator":
            continue
        name = declarator.child_by_field_name("name")
        value = declarator.child_by_field_name("value")
        if name is None or value is None:
            continue
        if name.type == "identifier" and value.type in FUNCTION_VALUE_TYPES:
            yield _span(_text(name), node)


def _match_class_methods(node: tree_sitter.Node) -> Iterator[SymbolRecord]:
    body = node.child_by_field_name("body")
    if body is None:
        return
    for member in body.named_children:
        if member.type != "method_definition":
            continue
        key = member.child_by_field_name("name")
        if key is not None and key.type == "property_identifier":
            yield _span(_text(key), member)


def _match_exported_function(node: tree_sitter.Node) -> Iterator[SymbolRecord]:
    if any(child.type == "default" for child in node.children):
        return
    declaration = node.child_by_field_name("declaration")
    if declaration is not None and declaration.type in FUNCTION_DECLARATION_TYPES:
        yield _span(_declared_name(declaration), node)


_MATCHERS: Dict[DeclarationKind, Callable[[tree_sitter.Node], Iterator[SymbolRecord]]] = {
    DeclarationKind.FUNCTION: _match_function,
    DeclarationKind.FUNCTION_VARIABLE: _match_function_variable,
    DeclarationKind.CLASS_METHODS: _match_class_methods,
    DeclarationKind.EXPORTED_FUNCTION: _match_exported_function,
}


def _first_error_node(node: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    if node.type == "ERROR" or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = _first_error_node(child)
        if found is not None:
            return found
    return node


def parse_source(source: bytes, file_name: str = "<source>", language: str = DEFAULT_LANGUAGE) -> tree_sitter.Tree:
    """
    Parse source bytes into a syntax tree.

    Raises:
        SyntaxError: the source is not valid in the grammar
    """
    tree = get_parser(language).parse(source)
    if tree.root_node.has_error:
        error_node = _first_error_node(tree.root_node)
        raise source_syntax_error(file_name, source, error_node)
    return tree


def parse_file(file_path: str, language: str = DEFAULT_LANGUAGE) -> Tuple[bytes, tree_sitter.Tree]:
    """Read a file and parse it; returns the raw bytes with the tree."""
    with open(file_path, "rb") as f:
        source = f.read()
    tree = parse_source(source, file_path, language)
    logger.debug("Parsed %s (%d bytes)", file_path, len(source))
    return source, tree


def extract_symbols(tree: tree_sitter.Tree) -> List[SymbolRecord]:
    """Return every indexed top-level symbol in declaration order."""
    symbols: List[SymbolRecord] = []
    for node in tree.root_node.named_children:
        kind = DECLARATION_KINDS.get(node.type)
        if kind is None:
            continue
        symbols.extend(_MATCHERS[kind](node))
    return symbols


def extract_function_by_name(tree: tree_sitter.Tree, name: str) -> Optional[ByteRange]:
    """First symbol named ``name`` in declaration order, or None."""
    for symbol in extract_symbols(tree):
        if symbol.name == name:
            return symbol.range
    return None
