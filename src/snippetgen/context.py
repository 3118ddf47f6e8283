# -------------------------------------
# generation context
# -------------------------------------
"""
Per-line generation state.

One GenerationContext lives for exactly one input line. It tracks the
variables and types already emitted so that later occurrences never
redeclare an identifier, and remembers the last declared variable/type
so handlers can offer them as defaults.
"""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class GenerationContext:
    variables: dict[str, str] = field(default_factory=dict)
    types: set[str] = field(default_factory=set)
    last_var: str = ""
    last_type: str = ""

    def unique_name(self, base: str) -> str:
        """base, or base1, base2, ... whichever is first unused."""
        name = base
        suffix = 1
        while name in self.variables:
            name = f"{base}{suffix}"
            suffix += 1
        return name

    def record(self, name: str, type_name: str) -> None:
        self.variables[name] = type_name
        self.last_var = name

    def declare(self, type_name: str, base: str, init: str) -> tuple[str, str]:
        return declare_variable(self, type_name, base, init)

    def declare_type(self, name: str) -> None:
        self.types.add(name)
        self.last_type = name


def declare_variable(ctx: GenerationContext, type_name: str, base: str, init: str) -> tuple[str, str]:
    """
    Declare a variable without colliding with earlier declarations.

    Returns:
        (statement, final_name), e.g. ("int x1 = 0;", "x1") when x exists.
    """
    name = ctx.unique_name(base)
    ctx.record(name, type_name)
    return f"{type_name} {name} = {init};", name
