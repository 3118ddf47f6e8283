# -------------------------------------
# snippetgen
# -------------------------------------
"""
Keyword-driven C++17 snippet generator.

Provides:
- custom keyword storage (store)
- {placeholder} expansion (placeholders)
- occurrence resolution and dispatch (resolver, dispatch)
- fragment aggregation and program assembly (fragments)
- the interactive REPL (repl)
"""

from .context import GenerationContext, declare_variable
from .dispatch import dispatch, dispatch_all, generate_line
from .errors import (
    ConfigError,
    DuplicateKeywordError,
    EntryPointError,
    NameCollisionError,
    SnippetError,
)
from .fragments import Fragment, aggregate, assemble_program
from .keywords import BUILTIN_KEYWORDS, classify
from .placeholders import expand, macro_fragment, split_includes, substitute
from .prompt import EOI, Prompter
from .resolver import Occurrence, occurrence_tag, resolve_occurrences
from .store import MacroDefinition, MacroStore, load_macros, save_macros
from .tokens import normalize_token

__all__ = [
    "GenerationContext",
    "declare_variable",
    "dispatch",
    "dispatch_all",
    "generate_line",
    "ConfigError",
    "DuplicateKeywordError",
    "EntryPointError",
    "NameCollisionError",
    "SnippetError",
    "Fragment",
    "aggregate",
    "assemble_program",
    "BUILTIN_KEYWORDS",
    "classify",
    "expand",
    "macro_fragment",
    "split_includes",
    "substitute",
    "EOI",
    "Prompter",
    "Occurrence",
    "occurrence_tag",
    "resolve_occurrences",
    "MacroDefinition",
    "MacroStore",
    "load_macros",
    "save_macros",
    "normalize_token",
]
