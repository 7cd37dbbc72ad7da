"""
Script feature extraction over tree-sitter syntax trees.

The tree is visited in document order (pre-order) and every named node whose
kind has a handler contributes zero or more raw occurrences. Occurrences keep
visitation order; nothing is re-sorted here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from ..domain.models import RawOccurrence
from .failure_reason import AnalysisFailure, FailureReason
from .vocabulary import (
    CONSTRUCTOR_FEATURES,
    DEPRECATED_FUNCTIONS,
    GENERIC_OBJECT_FEATURE,
    SYMBOL_CALL,
    compound_key,
)

JAVASCRIPT_LANGUAGE = Language(tree_sitter_javascript.language())
TYPESCRIPT_LANGUAGE = Language(tree_sitter_typescript.language_typescript())
TSX_LANGUAGE = Language(tree_sitter_typescript.language_tsx())

LANGUAGE_BY_SUFFIX = {
    ".js": JAVASCRIPT_LANGUAGE,
    ".jsx": JAVASCRIPT_LANGUAGE,
    ".mjs": JAVASCRIPT_LANGUAGE,
    ".cjs": JAVASCRIPT_LANGUAGE,
    ".ts": TYPESCRIPT_LANGUAGE,
    ".tsx": TSX_LANGUAGE,
}
"""Grammar used for each supported script extension."""

SCRIPT_SUFFIXES = frozenset(LANGUAGE_BY_SUFFIX)

Handler = Callable[[Node], Iterator[RawOccurrence]]


def language_for(path: str | Path) -> Language:
    return LANGUAGE_BY_SUFFIX.get(Path(path).suffix.lower(), JAVASCRIPT_LANGUAGE)


def parse_script(source: bytes, language: Language = JAVASCRIPT_LANGUAGE) -> Tree:
    """
    Parse ``source`` and return its tree.

    tree-sitter recovers from syntax errors; a tree that needed recovery is
    treated as unparseable so no partial results leak out.
    """

    tree = Parser(language).parse(source)
    if tree.root_node.has_error:
        line, column = _first_error_position(tree)
        raise AnalysisFailure(
            FailureReason.UNPARSEABLE,
            f"Parsing error at line {line}, column {column}",
        )
    return tree


def iter_named_nodes(tree: Tree) -> Iterator[Node]:
    """Yield every named node in pre-order, i.e. document order."""

    cursor = tree.walk()
    while True:
        node = cursor.node
        if node is not None and node.is_named:
            yield node
        if cursor.goto_first_child():
            continue
        while not cursor.goto_next_sibling():
            if not cursor.goto_parent():
                return


def _first_error_position(tree: Tree) -> tuple[int, int]:
    cursor = tree.walk()
    while True:
        node = cursor.node
        if node is not None and (node.type == "ERROR" or node.is_missing):
            return _position(node)
        if cursor.goto_first_child():
            continue
        while not cursor.goto_next_sibling():
            if not cursor.goto_parent():
                return _position(tree.root_node)


def _position(node: Node) -> tuple[int, int]:
    row, column = node.start_point
    return row + 1, column + 1


def _text(node: Node) -> str:
    return (node.text or b"").decode("utf-8", errors="replace")


def _is_async(node: Node) -> bool:
    return any(child.type == "async" for child in node.children)


def _is_generator(node: Node) -> bool:
    return any(child.type == "*" for child in node.children)


# Expression kinds that form one chain, e.g. ``a?.b?.c()`` or ``a?.[0]``.
_CHAIN_KINDS = frozenset({"member_expression", "call_expression", "subscript_expression"})


def _chain_inner(node: Node) -> Node | None:
    return node.child_by_field_name("object") or node.child_by_field_name("function")


def _is_chain_link(node: Node) -> bool:
    """True when ``node`` is the object or callee of an enclosing chain expression."""

    parent = node.parent
    return parent is not None and parent.type in _CHAIN_KINDS and _chain_inner(parent) == node


def _has_optional_link(node: Node | None) -> bool:
    while node is not None and node.type in _CHAIN_KINDS:
        if any(child.type == "optional_chain" for child in node.children):
            return True
        node = _chain_inner(node)
    return False


def _occurrence(kind: str, name: str, node: Node, key: str | None = None) -> RawOccurrence:
    line, column = _position(node)
    return RawOccurrence(kind=kind, display_name=name, line=line, column=column, key=key)


def _member_names(node: Node) -> tuple[str, str] | None:
    """Return ``(object, property)`` for ``Identifier.property`` accesses."""

    obj = node.child_by_field_name("object")
    prop = node.child_by_field_name("property")
    if obj is None or prop is None:
        return None
    if obj.type != "identifier" or prop.type != "property_identifier":
        return None
    return _text(obj), _text(prop)


class ScriptFeatureExtractor:
    """Turns a parsed script into raw occurrences, one handler per node kind."""

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {
            "identifier": self._identifier,
            "member_expression": self._chained(self._member_expression),
            "call_expression": self._chained(self._call_expression),
            "subscript_expression": self._chained(None),
            "new_expression": self._new_expression,
            "lexical_declaration": self._lexical_declaration,
            "class_declaration": self._class("class declaration"),
            "abstract_class_declaration": self._class("class declaration"),
            "class": self._class("class expression"),
            "function_declaration": self._function("function declaration", "async function"),
            "function_expression": self._function(
                "function expression", "async function expression"
            ),
            "function": self._function("function expression", "async function expression"),
            "method_definition": self._method_definition,
            "arrow_function": self._function("arrow function", "async arrow function"),
            "generator_function_declaration": self._generator(
                "generator function", "async generator function"
            ),
            "generator_function": self._generator(
                "generator expression", "async generator expression"
            ),
            "await_expression": self._construct("await expression"),
            "yield_expression": self._construct("yield expression"),
            "object_pattern": self._construct("object destructuring"),
            "array_pattern": self._construct("array destructuring"),
            "spread_element": self._construct("spread syntax"),
            "template_string": self._construct("template literal"),
            "for_in_statement": self._for_in_statement,
            "number": self._number,
            "binary_expression": self._binary_expression,
            "catch_clause": self._catch_clause,
        }

    def extract(self, tree: Tree) -> list[RawOccurrence]:
        occurrences: list[RawOccurrence] = []
        for node in iter_named_nodes(tree):
            handler = self._handlers.get(node.type)
            if handler is not None:
                occurrences.extend(handler(node))
        return occurrences

    def extract_source(
        self, source: bytes, language: Language = JAVASCRIPT_LANGUAGE
    ) -> list[RawOccurrence]:
        return self.extract(parse_script(source, language))

    # Handlers

    @staticmethod
    def _identifier(node: Node) -> Iterator[RawOccurrence]:
        parent = node.parent
        if parent is not None and parent.type == "member_expression":
            # The member rule reports the object side itself.
            if parent.child_by_field_name("object") == node:
                return
        yield _occurrence("identifier", _text(node), node)

    @staticmethod
    def _member_expression(node: Node) -> Iterator[RawOccurrence]:
        obj = node.child_by_field_name("object")
        if obj is None or obj.type != "identifier":
            return
        names = _member_names(node)
        if names is not None:
            object_name, property_name = names
            yield _occurrence(
                "member",
                f"{object_name}.{property_name}",
                node,
                key=compound_key(object_name, property_name),
            )
        yield _occurrence("identifier", _text(obj), obj)

    @staticmethod
    def _call_expression(node: Node) -> Iterator[RawOccurrence]:
        callee = node.child_by_field_name("function")
        if callee is None:
            return
        if callee.type == "member_expression":
            names = _member_names(callee)
            if names is None:
                return
            object_name, property_name = names
            if object_name == "Object":
                key = GENERIC_OBJECT_FEATURE
            else:
                key = compound_key(object_name, property_name)
            yield _occurrence("call", f"{object_name}.{property_name}()", node, key=key)
        elif callee.type == "identifier":
            name = _text(callee)
            if name in DEPRECATED_FUNCTIONS:
                yield _occurrence("deprecated-call", name, node)
            elif name == "Symbol":
                yield _occurrence("call", SYMBOL_CALL, node)

    @staticmethod
    def _new_expression(node: Node) -> Iterator[RawOccurrence]:
        constructor = node.child_by_field_name("constructor")
        if constructor is None or constructor.type != "identifier":
            return
        name = _text(constructor)
        if name in CONSTRUCTOR_FEATURES:
            yield _occurrence("new", f"new {name}()", node, key=CONSTRUCTOR_FEATURES[name])

    @staticmethod
    def _lexical_declaration(node: Node) -> Iterator[RawOccurrence]:
        kind = node.child_by_field_name("kind") or (node.children[0] if node.children else None)
        if kind is not None and kind.type in ("let", "const"):
            yield _occurrence("declaration", f"{kind.type} declaration", node)

    @staticmethod
    def _for_in_statement(node: Node) -> Iterator[RawOccurrence]:
        # The loop header holds its let/const keyword directly, with no
        # lexical_declaration node around it.
        kind = node.child_by_field_name("kind")
        if kind is not None and kind.type in ("let", "const"):
            yield _occurrence("declaration", f"{kind.type} declaration", node)
        child_types = {child.type for child in node.children}
        if "of" not in child_types:
            return
        if "await" in child_types:
            yield _occurrence("iteration", "for await...of loop", node)
        else:
            yield _occurrence("iteration", "for...of loop", node)

    @staticmethod
    def _method_definition(node: Node) -> Iterator[RawOccurrence]:
        if _is_generator(node):
            name = "async generator expression" if _is_async(node) else "generator expression"
            yield _occurrence("generator", name, node)
            return
        if _is_async(node):
            yield _occurrence("function", "async function expression", node)
        yield _occurrence("function", "function expression", node)

    @staticmethod
    def _number(node: Node) -> Iterator[RawOccurrence]:
        if _text(node).endswith("n"):
            yield _occurrence("literal", "BigInt literal", node)

    @staticmethod
    def _binary_expression(node: Node) -> Iterator[RawOccurrence]:
        operator = node.child_by_field_name("operator")
        if operator is not None and operator.type == "??":
            yield _occurrence("logical", "nullish coalescing operator", node)

    @staticmethod
    def _catch_clause(node: Node) -> Iterator[RawOccurrence]:
        if node.child_by_field_name("parameter") is None:
            yield _occurrence("catch", "optional catch binding", node)

    # Handler factories

    @staticmethod
    def _chained(inner: Handler | None) -> Handler:
        """Report optional chaining once, at the start of the outermost chain expression."""

        def handler(node: Node) -> Iterator[RawOccurrence]:
            if not _is_chain_link(node) and _has_optional_link(node):
                yield _occurrence("optional_chain", "optional chaining", node)
            if inner is not None:
                yield from inner(node)

        return handler

    @staticmethod
    def _construct(name: str) -> Handler:
        def handler(node: Node) -> Iterator[RawOccurrence]:
            yield _occurrence(node.type, name, node)

        return handler

    @staticmethod
    def _class(name: str) -> Handler:
        def handler(node: Node) -> Iterator[RawOccurrence]:
            yield _occurrence("class", name, node)

        return handler

    @staticmethod
    def _function(plain_name: str, async_name: str) -> Handler:
        def handler(node: Node) -> Iterator[RawOccurrence]:
            if _is_async(node):
                yield _occurrence("function", async_name, node)
            yield _occurrence("function", plain_name, node)

        return handler

    @staticmethod
    def _generator(plain_name: str, async_name: str) -> Handler:
        def handler(node: Node) -> Iterator[RawOccurrence]:
            yield _occurrence("generator", async_name if _is_async(node) else plain_name, node)

        return handler
