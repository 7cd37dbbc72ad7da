"""Fixed vocabulary tables mapping script constructs to feature identifiers."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

GENERIC_OBJECT_FEATURE = "object-object"
"""Identifier every ``Object.<method>`` call is first attributed to."""

DEPRECATED_FEATURE = "escape-unescape"
SYMBOL_FEATURE = "symbol"
SYMBOL_CALL = "Symbol()"
"""Display name emitted for a bare ``Symbol(...)`` call."""

SKIP_IDENTIFIERS: frozenset[str] = frozenset(
    [chr(code) for code in range(ord("a"), ord("z") + 1)]
    + [
        "data",
        "target",
        "source",
        "input",
        "output",
        "value",
        "key",
        "item",
        "element",
        "node",
        "result",
        "response",
    ]
)
"""Short or generic names that collide with unrelated knowledge base keys."""

DEPRECATED_FUNCTIONS: frozenset[str] = frozenset({"escape", "unescape"})

SYNTAX_FEATURES: Mapping[str, str] = MappingProxyType(
    {
        "let declaration": "let-const",
        "const declaration": "let-const",
        "class declaration": "class-syntax",
        "class expression": "class-syntax",
        "function declaration": "functions",
        "function expression": "functions",
        "arrow function": "functions",
        "async function": "async-await",
        "async function expression": "async-await",
        "async arrow function": "async-await",
        "await expression": "async-await",
        "generator function": "generators",
        "generator expression": "generators",
        "async generator function": "async-generators",
        "async generator expression": "async-generators",
        "yield expression": "generators",
        "object destructuring": "destructuring",
        "array destructuring": "destructuring",
        "spread syntax": "spread",
        "template literal": "template-literals",
        "for...of loop": "iterators",
        "for await...of loop": "async-iterators",
        "BigInt literal": "bigint",
        "nullish coalescing operator": "nullish-coalescing",
        "optional chaining": "optional-chaining",
        "optional catch binding": "optional-catch-binding",
    }
)
"""Syntax-construct display names and the features they exercise."""

_TYPED_ARRAYS = (
    "Int8Array",
    "Uint8Array",
    "Int16Array",
    "Uint16Array",
    "Int32Array",
    "Uint32Array",
    "Float32Array",
    "Float64Array",
)

CONSTRUCTOR_FEATURES: Mapping[str, str] = MappingProxyType(
    {
        "Array": "array",
        "Set": "set-methods",
        "Map": "map",
        "WeakMap": "weakmap",
        "WeakSet": "weakset",
        "Promise": "promise",
        "Proxy": "proxy-reflect",
        "Symbol": "symbol",
        "BigInt": "bigint",
        **{name: "typed-arrays" for name in _TYPED_ARRAYS},
        "BigInt64Array": "bigint64array",
        "BigUint64Array": "bigint64array",
    }
)
"""Constructor names reported by ``new X()`` and their feature identifiers."""


def compound_key(object_name: str, property_name: str) -> str:
    """Return the lower-cased, hyphen-joined key for ``Object.Property``."""

    return f"{object_name}-{property_name}".lower()
