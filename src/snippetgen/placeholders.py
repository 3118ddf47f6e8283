# -------------------------------------
# placeholder expansion
# -------------------------------------
"""
Expand {name} placeholders in a custom keyword body.

Values come from the caller's overrides, falling back to the defaults
stored with the keyword. Replacement is plain substring replacement,
applied longest parameter name first. Include directives found in the
expanded text are separated from the statements so the assembler can
hoist and deduplicate them.
"""
from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from .errors import EntryPointError
from .fragments import Fragment
from .store import MacroDefinition

ENTRY_POINT = "int main("

_INCLUDE_RE = re.compile(r"^#\s*include\b(.*)$")


def substitute(body: str, params: Iterable[tuple[str, str]], overrides: Mapping[str, str] | None = None) -> str:
    """
    Replace every {name} in body with its override or default.

    Example:
        >>> substitute("x={a} y={b}", [("a", "1"), ("b", "2")], {"a": "9"})
        'x=9 y=2'
    """
    overrides = overrides or {}
    ordered = sorted(enumerate(params), key=lambda ip: (-len(ip[1][0]), ip[0]))
    out = body
    for _, (name, default) in ordered:
        if not name:
            continue
        value = overrides.get(name, default)
        out = out.replace("{" + name + "}", value)
    return out


def split_includes(text: str) -> tuple[list[str], list[str]]:
    """
    Partition lines into include entries and body lines.

    "#include <vector>" and "# include <vector>" both yield "<vector>".
    Lines are split on newlines only; form feeds and other breaks stay in the text.
    """
    includes: list[str] = []
    body: list[str] = []
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    for line in lines:
        m = _INCLUDE_RE.match(line.strip())
        if m:
            includes.append(m.group(1).strip())
        else:
            body.append(line)
    return includes, body


def expand(
    body: str,
    params: Iterable[tuple[str, str]],
    overrides: Mapping[str, str] | None = None,
    tag: str = "",
    *,
    name: str = "",
    entry_point: str = ENTRY_POINT,
) -> tuple[list[str], list[str]]:
    """
    Expand a macro body into (include_lines, body_lines).

    Raises:
        EntryPointError: if the expanded body defines its own entry point
    """
    text = substitute(body, params, overrides)
    if entry_point in text:
        raise EntryPointError(f"custom keyword '{name}' contains '{entry_point}'")
    includes, lines = split_includes(text)
    label = f"Custom keyword '{name}'" if name else "Custom keyword"
    header = f"// ({tag}) {label} (with parameter substitution):"
    return includes, [header] + lines


def macro_fragment(
    name: str,
    macro: MacroDefinition,
    overrides: Mapping[str, str] | None = None,
    tag: str = "",
    *,
    entry_point: str = ENTRY_POINT,
) -> Fragment:
    """Expand a macro into a Fragment; an entry point yields an error comment only."""
    try:
        includes, body = expand(macro.body, macro.params, overrides, tag, name=name, entry_point=entry_point)
    except EntryPointError as e:
        return Fragment(body=[f"// ({tag}) error: {e}; snippet not inserted"])
    return Fragment(includes=includes, body=body)
