# -------------------------------------
# snippetgen errors
# -------------------------------------
"""
Exception types raised by snippetgen.

End of input is not an exception: the prompter returns the EOI sentinel.
"""


class SnippetError(ValueError):
    pass


class NameCollisionError(SnippetError):
    """Custom keyword name is already a builtin keyword."""


class DuplicateKeywordError(SnippetError):
    """Custom keyword already exists and overwrite was not requested."""


class EntryPointError(SnippetError):
    """Expanded macro body contains its own entry point."""


class ConfigError(SnippetError):
    pass
