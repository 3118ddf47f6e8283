"""Tests for snippetgen.context module."""

from snippetgen.context import GenerationContext, declare_variable


class TestDeclareVariable:
    """Tests for collision-safe declarations."""

    def test_first_declaration_keeps_name(self):
        ctx = GenerationContext()
        assert declare_variable(ctx, "int", "x", "0") == ("int x = 0;", "x")
        assert ctx.variables == {"x": "int"}
        assert ctx.last_var == "x"

    def test_same_base_name_suffixed_from_one(self):
        ctx = GenerationContext()
        _, first = declare_variable(ctx, "int", "x", "0")
        stmt, second = declare_variable(ctx, "double", "x", "1.5")
        assert first != second
        assert second == "x1"
        assert stmt == "double x1 = 1.5;"

    def test_suffix_keeps_increasing(self):
        ctx = GenerationContext()
        names = [ctx.declare("int", "n", "0")[1] for _ in range(4)]
        assert names == ["n", "n1", "n2", "n3"]
        assert ctx.last_var == "n3"

    def test_skips_names_already_taken(self):
        ctx = GenerationContext()
        ctx.record("x1", "int")
        ctx.declare("int", "x", "0")
        assert ctx.declare("int", "x", "0")[1] == "x2"

    def test_unique_name_does_not_record(self):
        ctx = GenerationContext()
        assert ctx.unique_name("v") == "v"
        assert ctx.variables == {}


class TestDeclareType:
    def test_declare_type(self):
        ctx = GenerationContext()
        ctx.declare_type("Color")
        assert ctx.types == {"Color"}
        assert ctx.last_type == "Color"
