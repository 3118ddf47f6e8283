# -------------------------------------
# keyword registry
# -------------------------------------
"""
The closed set of builtin (C++17) keywords and the classification of a
resolved keyword name into one of three kinds:

  - MacroKeyword(name, macro)      user-defined, expanded from the store
  - BuiltinKeyword(name, handler)  builtin with a tailored handler
  - FallbackKeyword(name)          builtin without a handler
"""
from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Union

from .store import MacroDefinition, MacroStore

BUILTIN_KEYWORDS: frozenset[str] = frozenset({
    "alignas", "alignof", "and", "and_eq", "asm", "auto", "bitand", "bitor", "bool", "break",
    "case", "catch", "char", "char16_t", "char32_t", "class", "compl", "const", "constexpr", "const_cast",
    "continue", "decltype", "default", "delete", "do", "double", "dynamic_cast", "else", "enum", "explicit",
    "export", "extern", "false", "float", "for", "friend", "goto", "if", "inline", "int",
    "long", "mutable", "namespace", "new", "noexcept", "not", "not_eq", "nullptr", "operator", "or",
    "or_eq", "private", "protected", "public", "register", "reinterpret_cast", "return", "short", "signed", "sizeof",
    "static", "static_assert", "static_cast", "struct", "switch", "template", "this", "thread_local", "throw", "true",
    "try", "typedef", "typeid", "typename", "union", "unsigned", "using", "virtual", "void", "volatile",
    "wchar_t", "while", "xor", "xor_eq",
})

# handler(prompter, ctx, keyword, tag) -> Fragment | EOI
Handler = Callable[..., object]


@dataclass(frozen=True)
class BuiltinKeyword:
    name: str
    handler: Handler


@dataclass(frozen=True)
class MacroKeyword:
    name: str
    macro: MacroDefinition


@dataclass(frozen=True)
class FallbackKeyword:
    name: str


KeywordKind = Union[BuiltinKeyword, MacroKeyword, FallbackKeyword]


def classify(name: str, store: MacroStore, handlers: Mapping[str, Handler]) -> KeywordKind:
    macro = store.get(name)
    if macro is not None:
        return MacroKeyword(name, macro)
    handler = handlers.get(name)
    if handler is not None:
        return BuiltinKeyword(name, handler)
    return FallbackKeyword(name)


def keyword_rows(names, per_row: int = 8) -> list[str]:
    """Sorted names, comma separated, per_row to a line."""
    ks = sorted(names)
    return [", ".join(ks[i:i + per_row]) for i in range(0, len(ks), per_row)]
