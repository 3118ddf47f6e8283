# -------------------------------------
# snippetgen CLI entry point
# -------------------------------------
"""
Usage:
    python -m snippetgen --store user_keywords.db
"""
from .repl import _main

if __name__ == "__main__":
    raise SystemExit(_main())
