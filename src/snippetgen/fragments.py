# -------------------------------------
# fragments and program assembly
# -------------------------------------
"""
A Fragment is what one keyword occurrence contributes to the program:
include directives, top-level declarations and main() body statements.

Fragments are concatenated in occurrence order; only includes are
deduplicated, at assembly time.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

CORE_INCLUDE = "<iostream>"


@dataclass
class Fragment:
    includes: list[str] = field(default_factory=list)
    top: list[str] = field(default_factory=list)
    body: list[str] = field(default_factory=list)

    def extend(self, other: Fragment) -> None:
        self.includes.extend(other.includes)
        self.top.extend(other.top)
        self.body.extend(other.body)


def aggregate(fragments: Iterable[Fragment]) -> Fragment:
    """Concatenate fragments in order, without reordering or merging."""
    acc = Fragment()
    for frag in fragments:
        acc.extend(frag)
    return acc


def _render_include(inc: str) -> str:
    s = inc.strip()
    if s.startswith("<") or s.startswith('"'):
        return s
    return f"<{s}>"


def unique_includes(includes: Iterable[str], core: str = CORE_INCLUDE) -> list[str]:
    """
    Deduplicate include entries by exact text, keeping first-seen order.

    Keys are the entries as given (surrounding whitespace trimmed), so
    "vector" and "<vector>" are distinct; entries equal to the core include
    are dropped. Bare names are wrapped in <> only when rendered.
    """
    seen = {core.strip()}
    out: list[str] = []
    for inc in includes:
        key = inc.strip()
        if key and key not in seen:
            seen.add(key)
            out.append(key)
    return out


def assemble_program(
    fragment: Fragment,
    *,
    core_include: str = CORE_INCLUDE,
    indent: int = 4,
    using_namespace: bool = True,
) -> str:
    """Render an aggregated fragment as one C++ translation unit."""
    pad = " " * indent
    lines = [f"#include {_render_include(core_include)}"]
    lines += [f"#include {_render_include(inc)}" for inc in unique_includes(fragment.includes, core_include)]
    lines.append("")
    lines += fragment.top
    lines.append("")
    if using_namespace:
        lines.append("using namespace std;")
        lines.append("")
    lines.append("int main() {")
    lines += [pad + line for line in fragment.body]
    lines.append(pad + "return 0;")
    lines.append("}")
    return "\n".join(lines) + "\n"
