"""Tests for snippetgen.fragments module."""

from snippetgen.fragments import Fragment, aggregate, assemble_program, unique_includes


class TestAggregate:
    def test_concatenates_in_order(self):
        agg = aggregate([
            Fragment(includes=["<vector>"], top=["struct A {};"], body=["a;"]),
            Fragment(includes=["<vector>"], body=["b;", "c;"]),
            Fragment(top=["struct B {};"]),
        ])
        assert agg.includes == ["<vector>", "<vector>"]
        assert agg.top == ["struct A {};", "struct B {};"]
        assert agg.body == ["a;", "b;", "c;"]

    def test_empty(self):
        assert aggregate([]) == Fragment()


class TestUniqueIncludes:
    def test_dedupe_first_seen(self):
        assert unique_includes(["<vector>", '"local.h"', "<vector>", "<map>"]) == ["<vector>", '"local.h"', "<map>"]

    def test_angle_and_quote_forms_distinct(self):
        assert unique_includes(["<a.h>", '"a.h"']) == ["<a.h>", '"a.h"']

    def test_keys_are_exact_text(self):
        assert unique_includes(["string", "<string>", " string ", "<iostream>", ""]) == ["string", "<string>"]

    def test_bare_name_wrapped_when_rendered(self):
        out = assemble_program(Fragment(includes=["vector", "vector"]))
        assert out.startswith("#include <iostream>\n#include <vector>\n\n")


class TestAssembleProgram:
    """Tests for assemble_program."""

    def test_layout(self):
        frag = Fragment(
            includes=["<stdexcept>", "<stdexcept>"],
            top=["enum class Color { Red };"],
            body=["int x = 0;", "cout << x << endl;"],
        )
        assert assemble_program(frag) == (
            "#include <iostream>\n"
            "#include <stdexcept>\n"
            "\n"
            "enum class Color { Red };\n"
            "\n"
            "using namespace std;\n"
            "\n"
            "int main() {\n"
            "    int x = 0;\n"
            "    cout << x << endl;\n"
            "    return 0;\n"
            "}\n"
        )

    def test_options(self):
        out = assemble_program(Fragment(body=["f();"]), core_include="cstdio", indent=2, using_namespace=False)
        assert out.startswith("#include <cstdio>\n")
        assert "using namespace" not in out
        assert "  f();\n  return 0;\n}" in out

    def test_single_entry_point(self):
        out = assemble_program(Fragment(body=["a;"]))
        assert out.count("int main(") == 1
