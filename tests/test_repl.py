"""Tests for snippetgen.repl module."""

import pytest

from snippetgen.keywords import BUILTIN_KEYWORDS
from snippetgen.repl import Repl, _main
from snippetgen.store import MacroDefinition, MacroStore, load_macros


@pytest.fixture
def store(tmp_path):
    return MacroStore(tmp_path / "kw.db", BUILTIN_KEYWORDS)


def _repl(store, make_prompter, *lines):
    io = make_prompter(*lines)
    return Repl(store, io), io


class TestDefine:
    """Tests for :add / :define."""

    def test_define_persists(self, store, make_prompter):
        repl, io = _repl(store, make_prompter, ":add", "Greet", "who=world", 'cout << "{who}";', ".")
        assert repl.run() == 0
        assert load_macros(store.path) == {
            "greet": MacroDefinition.create([("who", "world")], 'cout << "{who}";\n'),
        }
        assert "defined with 1 parameter(s)" in io.stdout.getvalue()

    def test_builtin_name_rejected(self, store, make_prompter):
        repl, io = _repl(store, make_prompter, ":define", "while")
        repl.run()
        assert "conflicts with a built-in" in io.stdout.getvalue()
        assert len(store) == 0

    def test_overwrite_declined(self, store, make_prompter):
        store.register("k", MacroDefinition.create([], "old\n"))
        repl, _ = _repl(store, make_prompter, ":add", "k", "n")
        repl.run()
        assert store.get("k").body == "old\n"

    def test_overwrite_accepted(self, store, make_prompter):
        store.register("k", MacroDefinition.create([], "old\n"))
        repl, _ = _repl(store, make_prompter, ":add", "k", "y", "", "new", ".")
        repl.run()
        assert store.get("k").body == "new\n"

    def test_eof_cancels(self, store, make_prompter):
        repl, _ = _repl(store, make_prompter, ":add", "k", "")
        assert repl.run() == 0
        assert len(store) == 0


class TestEditRemoveList:
    def test_edit_default(self, store, make_prompter):
        store.register("k", MacroDefinition.create([("a", "1"), ("b", "2")], "{a}{b}\n"))
        repl, _ = _repl(store, make_prompter, ":edit k", "default", "b", "7")
        repl.run()
        assert load_macros(store.path)["k"].params == (("a", "1"), ("b", "7"))

    def test_edit_add_param(self, store, make_prompter):
        store.register("k", MacroDefinition.create([("a", "1")], "{a}\n"))
        repl, _ = _repl(store, make_prompter, ":edit k", "add", "c=3")
        repl.run()
        assert store.get("k").params == (("a", "1"), ("c", "3"))

    def test_edit_body(self, store, make_prompter):
        store.register("k", MacroDefinition.create([], "old\n"))
        repl, _ = _repl(store, make_prompter, ":edit k", "body", "new1", "new2", ".")
        repl.run()
        assert load_macros(store.path)["k"].body == "new1\nnew2\n"

    def test_edit_unknown_param(self, store, make_prompter):
        store.register("k", MacroDefinition.create([("a", "1")], ""))
        repl, io = _repl(store, make_prompter, ":edit k", "drop", "zz")
        repl.run()
        assert "No parameter 'zz'" in io.stdout.getvalue()
        assert store.get("k").params == (("a", "1"),)

    def test_edit_default_with_comma_rejected(self, store, make_prompter):
        store.register("k", MacroDefinition.create([("a", "1")], "{a}\n"))
        repl, io = _repl(store, make_prompter, ":edit k", "default", "a", "1, 2")
        repl.run()
        assert "cannot be stored" in io.stdout.getvalue()
        assert store.get("k").params == (("a", "1"),)
        assert load_macros(store.path)["k"] == store.get("k")

    def test_edit_default_trimmed(self, store, make_prompter):
        store.register("k", MacroDefinition.create([("a", "1")], "{a}\n"))
        repl, _ = _repl(store, make_prompter, ":edit k", "default", "a", "  42 ")
        repl.run()
        assert load_macros(store.path)["k"].params == (("a", "42"),)

    def test_remove(self, store, make_prompter):
        store.register("k", MacroDefinition())
        repl, io = _repl(store, make_prompter, ":remove K")
        repl.run()
        assert "k" not in store
        assert load_macros(store.path) == {}
        assert "Removed 'k'" in io.stdout.getvalue()

    def test_remove_missing(self, store, make_prompter):
        repl, io = _repl(store, make_prompter, ":remove nope")
        repl.run()
        assert "No such custom keyword: 'nope'" in io.stdout.getvalue()

    def test_list(self, store, make_prompter):
        store.register("k", MacroDefinition.create([("a", "1"), ("b", "2")], ""))
        repl, io = _repl(store, make_prompter, ":list")
        repl.run()
        assert "  - k (params: a=1, b=2)" in io.stdout.getvalue()

    def test_help_lists_keywords(self, store, make_prompter):
        repl, io = _repl(store, make_prompter, ":help")
        repl.run()
        out = io.stdout.getvalue()
        assert ":remove <keyword>" in out
        assert "alignas, alignof, and, and_eq, asm, auto, bitand, bitor" in out

    def test_unknown_command(self, store, make_prompter):
        repl, io = _repl(store, make_prompter, ":frobnicate")
        repl.run()
        assert "Unknown command ':frobnicate'" in io.stdout.getvalue()


class TestGenerate:
    """Keyword lines through the REPL."""

    def test_program_printed(self, store, make_prompter):
        store.register("greet", MacroDefinition.create([("who", "world")], 'cout << "hi {who}" << endl;\n'))
        repl, io = _repl(store, make_prompter, "int greet", "", "", "bob", "exit")
        assert repl.run() == 0
        out = io.stdout.getvalue()
        assert "    int x = 0;" in out
        assert '    cout << "hi bob" << endl;' in out
        assert "Exit requested" in out

    def test_eof_mid_line_cancels(self, store, make_prompter):
        repl, io = _repl(store, make_prompter, "int for", "", "")
        assert repl.run() == 0
        out = io.stdout.getvalue()
        assert "Line cancelled" in out
        assert "Generated C++17 program" not in out

    def test_no_keywords(self, store, make_prompter):
        repl, io = _repl(store, make_prompter, "hello")
        repl.run()
        assert "No recognized C++17 or custom keyword" in io.stdout.getvalue()


class TestMain:
    def test_keywords(self, capsys):
        assert _main(["--keywords"]) == 0
        assert "xor, xor_eq" in capsys.readouterr().out

    def test_list(self, tmp_path, capsys):
        path = tmp_path / "kw.db"
        path.write_text("===KEYWORD:k===\n===PARAMS:a=1===\nx\n===END===\n", encoding="utf-8")
        assert _main(["--store", str(path), "--list"]) == 0
        assert "  - k (params: a=1)" in capsys.readouterr().out

    def test_bad_config(self, tmp_path, capsys):
        path = tmp_path / "c.yml"
        path.write_text("indent: nope\n", encoding="utf-8")
        assert _main(["--config", str(path), "--keywords"]) == 2
        assert "snippetgen error:" in capsys.readouterr().err
