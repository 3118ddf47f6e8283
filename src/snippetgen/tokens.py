# -------------------------------------
# token normalization
# -------------------------------------
"""
Token helpers shared by the resolver, the macro store and the REPL.

- normalize_token: strip leading/trailing punctuation, lowercase
- tokenize: whitespace split
- split_csv / parse_params / format_params: the "name=default,..." lists
"""
import string

_PUNCT = string.punctuation


def normalize_token(token: str) -> str:
    """Strip leading/trailing ASCII punctuation and lowercase the rest."""
    return token.strip(_PUNCT).lower()


def tokenize(line: str) -> list[str]:
    return line.split()


def split_csv(s: str) -> list[str]:
    """Split on commas and trim each item. Empty items are kept."""
    return [item.strip() for item in s.split(",")]


def parse_params(s: str) -> list[tuple[str, str]]:
    """
    Parse a parameter list of the form "name=default,other=42".

    A bare name yields an empty default, the split happens at the first "="
    and entries whose name is empty after trimming are dropped.

    Example:
        >>> parse_params("n=3, label , =x, expr=a=b")
        [('n', '3'), ('label', ''), ('expr', 'a=b')]
    """
    out: list[tuple[str, str]] = []
    if not s.strip():
        return out
    for part in split_csv(s):
        name, _, default = part.partition("=")
        name = name.strip()
        if name:
            out.append((name, default.strip()))
    return out


def format_params(params) -> str:
    """Inverse of parse_params for well-formed lists."""
    return ",".join(f"{name}={default}" for name, default in params)
