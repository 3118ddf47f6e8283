# -------------------------------------
# custom keyword storage
# -------------------------------------
"""
Persistence for user-defined keywords ("macros").

File format (UTF-8, one block per keyword, blocks in any order):

    ===KEYWORD:<name>===
    ===PARAMS:<name1>=<default1>,<name2>=<default2>===   (optional)
    <raw template body, one or more lines>
    ===END===

Loading never fails: a missing or unreadable file gives an empty mapping,
malformed marker lines are dropped and a block left open at end of file is
committed as is. Saving rewrites the whole file.
"""
from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from .errors import DuplicateKeywordError, NameCollisionError, SnippetError
from .tokens import format_params, normalize_token, parse_params

DEFAULT_STORE = "user_keywords.db"

KEYWORD_MARKER = "===KEYWORD:"
PARAMS_MARKER = "===PARAMS:"
END_MARKER = "===END==="
_CLOSE = "==="


# ============================================================
# Macro definition
# ============================================================

def check_param(name: str, default: str) -> None:
    """
    Reject a parameter the PARAMS line cannot carry.

    Names may not contain '=', ',' or '==='; defaults may not contain ','
    or '==='. Neither may have surrounding whitespace or line breaks.

    Raises:
        SnippetError: if the pair would not read back unchanged
    """
    for text in (name, default):
        if text != text.strip() or "\n" in text or "\r" in text or "," in text or _CLOSE in text:
            raise SnippetError(f"parameter {name}={default!r} cannot be stored in the keyword file")
    if not name or "=" in name:
        raise SnippetError(f"invalid parameter name '{name}'")


@dataclass(frozen=True)
class MacroDefinition:
    params: tuple[tuple[str, str], ...] = ()
    body: str = ""

    @classmethod
    def create(cls, params: Iterable[tuple[str, str]], body: str) -> MacroDefinition:
        return cls(tuple((str(n), str(d)) for n, d in params), body)

    @property
    def param_names(self) -> list[str]:
        return [name for name, _ in self.params]

    def default(self, name: str) -> str | None:
        for pname, pdef in self.params:
            if pname == name:
                return pdef
        return None

    def normalized(self) -> MacroDefinition:
        """Body as it reads back from disk (non-empty bodies end with a newline)."""
        if self.body and not self.body.endswith("\n"):
            return replace(self, body=self.body + "\n")
        return self

    # --- edit helpers, each returns a new definition ---

    def with_default(self, name: str, value: str) -> MacroDefinition:
        if name not in self.param_names:
            raise KeyError(name)
        check_param(name, value)
        return replace(self, params=tuple((n, value if n == name else d) for n, d in self.params))

    def with_param(self, name: str, default: str = "") -> MacroDefinition:
        """Append a parameter, or change its default if it already exists."""
        if name in self.param_names:
            return self.with_default(name, default)
        check_param(name, default)
        return replace(self, params=self.params + ((name, default),))

    def without_param(self, name: str) -> MacroDefinition:
        if name not in self.param_names:
            raise KeyError(name)
        return replace(self, params=tuple(p for p in self.params if p[0] != name))

    def with_body(self, body: str) -> MacroDefinition:
        return replace(self, body=body)


# ============================================================
# Parsing
# ============================================================

class _State(Enum):
    OUTSIDE = "outside"
    IN_BLOCK = "in_block"


def _marker_value(line: str) -> str | None:
    """
    Return the text between the first ':' and the last '===' of a marker
    line, or None when the marker is malformed.
    """
    colon = line.find(":")
    last = line.rfind(_CLOSE)
    if colon < 0 or last <= colon + 1:
        return None
    return line[colon + 1:last].strip()


def _iter_blocks(lines: Iterable[str]) -> Iterator[tuple[str, list[tuple[str, str]], str]]:
    """Yield (name, params, body) for every block, including a trailing open one."""
    state = _State.OUTSIDE
    name = ""
    params: list[tuple[str, str]] = []
    body: list[str] = []

    for line in lines:
        if state is _State.OUTSIDE:
            if line.startswith(KEYWORD_MARKER):
                key = _marker_value(line)
                if key is not None:
                    name, params, body = key, [], []
                    state = _State.IN_BLOCK
            continue

        if line.startswith(PARAMS_MARKER):
            value = _marker_value(line)
            if value is not None:
                params = parse_params(value)
        elif line == END_MARKER:
            yield name, params, "".join(body)
            state = _State.OUTSIDE
        else:
            body.append(line + "\n")

    if state is _State.IN_BLOCK:
        yield name, params, "".join(body)


def parse_macros(text: str) -> dict[str, MacroDefinition]:
    """Parse the store format from a string. Later blocks win on duplicate names."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    out: dict[str, MacroDefinition] = {}
    for name, params, body in _iter_blocks(lines):
        key = normalize_token(name)
        if key:
            out[key] = MacroDefinition.create(params, body)
    return out


def load_macros(path: str | Path = DEFAULT_STORE) -> dict[str, MacroDefinition]:
    """
    Load custom keywords from path.

    Returns:
        Mapping of keyword name to MacroDefinition; empty when the file
        is missing or cannot be read.
    """
    try:
        with open(path, encoding="utf-8", newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError):
        return {}
    return parse_macros(text)


# ============================================================
# Writing
# ============================================================

def format_macros(macros: dict[str, MacroDefinition]) -> str:
    """Render macros in the store format, sorted by name."""
    out: list[str] = []
    for name in sorted(macros):
        macro = macros[name]
        out.append(f"{KEYWORD_MARKER}{name}{_CLOSE}\n")
        if macro.params:
            out.append(f"{PARAMS_MARKER}{format_params(macro.params)}{_CLOSE}\n")
        out.append(macro.body)
        if macro.body and not macro.body.endswith("\n"):
            out.append("\n")
        out.append(END_MARKER + "\n")
    return "".join(out)


def save_macros(macros: dict[str, MacroDefinition], path: str | Path = DEFAULT_STORE) -> bool:
    """
    Overwrite path with every macro.

    Returns True on success, False if the file cannot be written.
    """
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(format_macros(macros))
    except OSError:
        return False
    return True


# ============================================================
# Store handle
# ============================================================

class MacroStore:
    """
    In-memory custom keywords kept in lockstep with their file.

    Every mutation rewrites the file and returns whether that worked; a
    failed write leaves the in-memory change in place.
    """

    def __init__(self, path: str | Path = DEFAULT_STORE, builtins: Iterable[str] = (),
                 macros: dict[str, MacroDefinition] | None = None):
        self.path = Path(path)
        self.builtins = frozenset(builtins)
        self._macros: dict[str, MacroDefinition] = dict(macros or {})

    @classmethod
    def open(cls, path: str | Path = DEFAULT_STORE, builtins: Iterable[str] = ()) -> MacroStore:
        """Load path; entries named like a builtin keyword are dropped with an error."""
        builtins = frozenset(builtins)
        macros = load_macros(path)
        for name in sorted(macros.keys() & builtins):
            print(f"snippetgen error: {path}: custom keyword '{name}' shadows a builtin keyword; ignored",
                  file=sys.stderr)
            del macros[name]
        return cls(path, builtins, macros)

    def __contains__(self, name: str) -> bool:
        return name in self._macros

    def __len__(self) -> int:
        return len(self._macros)

    def __iter__(self):
        return iter(sorted(self._macros))

    def names(self) -> frozenset[str]:
        return frozenset(self._macros)

    def items(self) -> list[tuple[str, MacroDefinition]]:
        return [(name, self._macros[name]) for name in sorted(self._macros)]

    def get(self, name: str) -> MacroDefinition | None:
        return self._macros.get(name)

    def save(self) -> bool:
        return save_macros(self._macros, self.path)

    def register(self, name: str, macro: MacroDefinition, overwrite: bool = False) -> bool:
        key = normalize_token(name)
        if not key:
            raise SnippetError("empty keyword name")
        if key in self.builtins:
            raise NameCollisionError(f"'{key}' conflicts with a builtin keyword")
        if key in self._macros and not overwrite:
            raise DuplicateKeywordError(f"custom keyword '{key}' already exists")
        for pname, default in macro.params:
            check_param(pname, default)
        self._macros[key] = macro
        return self.save()

    def update(self, name: str, macro: MacroDefinition) -> bool:
        if name not in self._macros:
            raise KeyError(name)
        for pname, default in macro.params:
            check_param(pname, default)
        self._macros[name] = macro
        return self.save()

    def remove(self, name: str) -> bool:
        del self._macros[normalize_token(name)]
        return self.save()
