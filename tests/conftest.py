import io

import pytest

from snippetgen.prompt import Prompter


@pytest.fixture
def make_prompter():
    """Build a Prompter reading the given lines; its output is in .stdout."""
    def _make(*lines):
        text = "".join(line + "\n" for line in lines)
        return Prompter(io.StringIO(text), io.StringIO())
    return _make
