"""
Resolve script display names to canonical feature identifiers.

Resolution is an ordered chain of strategies evaluated short-circuit: the
first strategy that yields an identifier present in the knowledge base wins.
The order is part of the contract, since several strategies can produce a
plausible identifier for the same name and the knowledge base content decides
which one matches.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from .knowledge_base import KnowledgeBase
from .vocabulary import (
    CONSTRUCTOR_FEATURES,
    DEPRECATED_FEATURE,
    DEPRECATED_FUNCTIONS,
    GENERIC_OBJECT_FEATURE,
    SKIP_IDENTIFIERS,
    SYMBOL_CALL,
    SYMBOL_FEATURE,
    SYNTAX_FEATURES,
)

_OBJECT_PREFIX = "Object."
_NEW_PREFIX = "new "
_CALL_SUFFIX = "()"


STOP = ""
"""Strategy result that ends the chain without an identifier."""


class ResolutionStrategy(Protocol):
    """A single heuristic mapping a display name to an identifier."""

    def try_resolve(self, name: str, knowledge_base: KnowledgeBase) -> str | None: ...


def _known(candidate: str | None, knowledge_base: KnowledgeBase) -> str | None:
    if candidate and candidate in knowledge_base:
        return candidate
    return None


class SkipListStrategy:
    """Generic and single-letter names never resolve."""

    __slots__ = ()

    def try_resolve(self, name: str, knowledge_base: KnowledgeBase) -> str | None:
        if name.lower() in SKIP_IDENTIFIERS:
            return STOP
        return None


class DirectLookupStrategy:
    __slots__ = ()

    def try_resolve(self, name: str, knowledge_base: KnowledgeBase) -> str | None:
        return _known(name, knowledge_base)


class SyntaxTableStrategy:
    __slots__ = ()

    def try_resolve(self, name: str, knowledge_base: KnowledgeBase) -> str | None:
        return _known(SYNTAX_FEATURES.get(name), knowledge_base)


class ConstructorStrategy:
    """``new Map()`` resolves through the constructor table."""

    __slots__ = ()

    def try_resolve(self, name: str, knowledge_base: KnowledgeBase) -> str | None:
        if not (name.startswith(_NEW_PREFIX) and name.endswith(_CALL_SUFFIX)):
            return None
        constructor = name[len(_NEW_PREFIX) : -len(_CALL_SUFFIX)]
        return _known(CONSTRUCTOR_FEATURES.get(constructor), knowledge_base)


class ObjectMethodStrategy:
    """``Object.<method>``: generic identifier, then ``object-<method>``, then bare."""

    __slots__ = ()

    def try_resolve(self, name: str, knowledge_base: KnowledgeBase) -> str | None:
        if not name.startswith(_OBJECT_PREFIX):
            return None
        method = name[len(_OBJECT_PREFIX) :].replace(_CALL_SUFFIX, "").lower()
        for candidate in (GENERIC_OBJECT_FEATURE, f"object-{method}", method):
            resolved = _known(candidate, knowledge_base)
            if resolved:
                return resolved
        return None


class MemberNameStrategy:
    """``Promise.try()`` and ``Promise.try`` both become ``promise-try``."""

    __slots__ = ()

    def try_resolve(self, name: str, knowledge_base: KnowledgeBase) -> str | None:
        if "." not in name:
            return None
        candidate = name.replace(_CALL_SUFFIX, "").lower().replace(".", "-")
        return _known(candidate, knowledge_base)


class SpecialCallStrategy:
    """Deprecated globals and the bare ``Symbol()`` call."""

    __slots__ = ()

    def try_resolve(self, name: str, knowledge_base: KnowledgeBase) -> str | None:
        if name in DEPRECATED_FUNCTIONS:
            return _known(DEPRECATED_FEATURE, knowledge_base)
        if name == SYMBOL_CALL:
            return _known(SYMBOL_FEATURE, knowledge_base)
        return None


DEFAULT_STRATEGIES: tuple[ResolutionStrategy, ...] = (
    SkipListStrategy(),
    DirectLookupStrategy(),
    SyntaxTableStrategy(),
    ConstructorStrategy(),
    ObjectMethodStrategy(),
    MemberNameStrategy(),
    SpecialCallStrategy(),
)


class IdentifierResolver:
    """Evaluates a strategy chain against one shared knowledge base."""

    def __init__(
        self,
        knowledge_base: KnowledgeBase,
        strategies: Sequence[ResolutionStrategy] = DEFAULT_STRATEGIES,
    ) -> None:
        self._knowledge_base = knowledge_base
        self._strategies = tuple(strategies)

    def resolve(self, name: str) -> str | None:
        """Return the first identifier any strategy produces, else None."""

        if not name:
            return None
        for strategy in self._strategies:
            resolved = strategy.try_resolve(name, self._knowledge_base)
            if resolved is not None:
                return resolved or None
        return None
