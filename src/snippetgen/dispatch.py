# -------------------------------------
# occurrence dispatch pipeline
# -------------------------------------
"""
Turn one input line into one program:

    tokenize -> resolve occurrences -> dispatch each occurrence in order
             -> aggregate fragments -> assemble program

A fresh GenerationContext is threaded through every occurrence of the
line. End of input at any prompt abandons the line: EOI is returned and
nothing is assembled.
"""
from __future__ import annotations

from collections.abc import Mapping

from .config import Config
from .context import GenerationContext
from .fragments import Fragment, aggregate, assemble_program
from .handlers import BUILTIN_HANDLERS, generic_handler
from .keywords import BUILTIN_KEYWORDS, BuiltinKeyword, FallbackKeyword, Handler, MacroKeyword, classify
from .placeholders import ENTRY_POINT, macro_fragment
from .prompt import EOI, EndOfInput, Prompter
from .resolver import Occurrence, describe_occurrences, resolve_occurrences
from .store import MacroDefinition, MacroStore


def prompt_overrides(io: Prompter, macro: MacroDefinition, tag: str) -> dict[str, str] | EndOfInput:
    """Ask for every parameter in declared order, defaults pre-filled."""
    values: dict[str, str] = {}
    for name, default in macro.params:
        answer = io.ask(f"[{tag}] Value for parameter '{name}'", default)
        if answer is EOI:
            return EOI
        values[name] = answer
    return values


def dispatch(
    occ: Occurrence,
    ctx: GenerationContext,
    store: MacroStore,
    io: Prompter,
    handlers: Mapping[str, Handler] = BUILTIN_HANDLERS,
    *,
    entry_point: str = ENTRY_POINT,
) -> Fragment | EndOfInput:
    """Produce the fragment for one occurrence, or EOI."""
    tag = occ.tag
    kind = classify(occ.name, store, handlers)

    if isinstance(kind, MacroKeyword):
        values = prompt_overrides(io, kind.macro, tag)
        if values is EOI:
            return EOI
        return macro_fragment(kind.name, kind.macro, values, tag, entry_point=entry_point)
    if isinstance(kind, BuiltinKeyword):
        return kind.handler(io, ctx, kind.name, tag)
    if isinstance(kind, FallbackKeyword):
        return generic_handler(io, ctx, kind.name, tag, entry_point=entry_point)
    raise TypeError(f"unknown keyword kind: {kind!r}")


def dispatch_all(
    occurrences: list[Occurrence],
    store: MacroStore,
    io: Prompter,
    handlers: Mapping[str, Handler] = BUILTIN_HANDLERS,
    *,
    entry_point: str = ENTRY_POINT,
) -> Fragment | EndOfInput:
    """Dispatch occurrences strictly in order and aggregate their fragments."""
    ctx = GenerationContext()
    fragments: list[Fragment] = []
    for occ in occurrences:
        io.say(f"--- Asking about keyword occurrence {occ.index}: '{occ.name}' (token {occ.position}) ---")
        frag = dispatch(occ, ctx, store, io, handlers, entry_point=entry_point)
        if frag is EOI:
            return EOI
        fragments.append(frag)
        io.say()
    return aggregate(fragments)


def generate_line(
    line: str,
    store: MacroStore,
    io: Prompter,
    handlers: Mapping[str, Handler] = BUILTIN_HANDLERS,
    config: Config | None = None,
) -> str | EndOfInput | None:
    """
    Run the whole pipeline for one input line.

    Returns:
        The assembled program, None if the line holds no known keyword,
        or EOI if input ended while prompting.
    """
    config = config or Config()
    occurrences = resolve_occurrences(line, BUILTIN_KEYWORDS, store.names())
    if not occurrences:
        return None

    io.say(f"\nDetected occurrences in order: {describe_occurrences(occurrences)}\n")
    agg = dispatch_all(occurrences, store, io, handlers, entry_point=config.entry_point)
    if agg is EOI:
        return EOI
    return assemble_program(
        agg,
        core_include=config.core_include,
        indent=config.indent,
        using_namespace=config.using_namespace,
    )
