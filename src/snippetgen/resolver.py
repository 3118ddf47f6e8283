# -------------------------------------
# occurrence resolver
# -------------------------------------
"""
Find every keyword occurrence in an input line.

Occurrences keep input order and duplicates, so prompts can refer to
"occurrence 3 (token 7)" even when a keyword appears several times.
"""
from __future__ import annotations

from collections.abc import Container
from dataclasses import dataclass

from .tokens import normalize_token, tokenize


@dataclass(frozen=True)
class Occurrence:
    name: str
    position: int  # 1-based token index in the input line
    index: int = 0  # 1-based occurrence index, 0 if unnumbered

    @property
    def tag(self) -> str:
        return occurrence_tag(self)


def occurrence_tag(occ: Occurrence) -> str:
    return f"occurrence {occ.index} (token {occ.position})"


def resolve_occurrences(line: str, builtin_names: Container[str], macro_names: Container[str]) -> list[Occurrence]:
    """
    Return the keyword occurrences of line in order.

    Example:
        >>> [(o.name, o.position) for o in resolve_occurrences("int, x for INT", {"int", "for"}, set())]
        [('int', 1), ('for', 3), ('int', 4)]
    """
    out: list[Occurrence] = []
    for pos, token in enumerate(tokenize(line), start=1):
        name = normalize_token(token)
        if not name:
            continue
        if name in builtin_names or name in macro_names:
            out.append(Occurrence(name, pos, len(out) + 1))
    return out


def describe_occurrences(occurrences: list[Occurrence]) -> str:
    return " ".join(f"[{o.index}] '{o.name}'(token {o.position})" for o in occurrences)
