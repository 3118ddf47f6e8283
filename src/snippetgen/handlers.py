# -------------------------------------
# builtin keyword handlers
# -------------------------------------
"""
Fragment generators for builtin keywords.

Each handler has the signature

    handler(io: Prompter, ctx: GenerationContext, kw: str, tag: str) -> Fragment | EOI

and returns EOI as soon as one of its prompts hits end of input. They are
plain string templates; the generation context is used to avoid name
clashes and to offer the last declared variable as a default.
"""
from __future__ import annotations

from types import MappingProxyType

from .context import GenerationContext
from .fragments import Fragment
from .placeholders import ENTRY_POINT
from .prompt import EOI, Prompter
from .tokens import normalize_token, split_csv

_TYPE_DEFAULTS = {
    "int": "0",
    "double": "3.14",
    "float": "2.5f",
    "char": "'a'",
    "long": "123456789L",
    "short": "42",
    "signed": "0",
    "unsigned": "0",
    "bool": "true",
    "wchar_t": "L'a'",
    "char16_t": "u'a'",
    "char32_t": "U'a'",
}


def _ask_many(io: Prompter, tag: str, questions):
    """Ask (prompt, default) pairs in order; EOI if any of them hits end of input."""
    answers = []
    for prompt, default in questions:
        answer = io.ask(f"[{tag}] {prompt}", default)
        if answer is EOI:
            return EOI
        answers.append(answer)
    return answers


def _split_declaration(init: str) -> tuple[str, str, str] | None:
    """
    'int n = 3' -> ('int', 'n', '3'), 'unsigned int n = 3' -> ('unsigned int', 'n', '3').

    Every word before the last one in the head is the type. None if it is
    not a simple declaration.
    """
    head, eq, value = init.partition("=")
    parts = head.split()
    if len(parts) < 2 or not eq:
        return None
    name = normalize_token(parts[-1])
    if not name:
        return None
    return " ".join(parts[:-1]), name, value.strip().rstrip(";")


def _member(spec: str) -> tuple[str, str]:
    name, _, type_name = spec.partition(":")
    return name.strip(), (type_name.strip() or "int")


# ============================================================
# Declarations
# ============================================================

def handle_type(io: Prompter, ctx: GenerationContext, kw: str, tag: str):
    answers = _ask_many(io, tag, [(f"Variable name for type '{kw}'", "x")])
    if answers is EOI:
        return EOI
    name = answers[0]
    init = io.ask(f"[{tag}] Initial value for {name}", _TYPE_DEFAULTS.get(kw, "0"))
    if init is EOI:
        return EOI
    decl, final = ctx.declare(kw, name, init)
    return Fragment(body=[
        f"// ({tag}) Demonstrate type: {kw}",
        decl,
        f'cout << "{final} = " << {final} << endl;',
    ])


def handle_auto(io: Prompter, ctx: GenerationContext, kw: str, tag: str):
    answers = _ask_many(io, tag, [
        ("Initializer expression for auto variable", ctx.last_var or "42"),
        ("Variable name", "v"),
    ])
    if answers is EOI:
        return EOI
    init, name = answers
    decl, final = ctx.declare("auto", name, init)
    return Fragment(body=[
        f"// ({tag}) Demonstrate auto (type deduction)",
        decl,
        f'cout << "{final} (deduced) = " << {final} << endl;',
    ])


def handle_class(io: Prompter, ctx: GenerationContext, kw: str, tag: str):
    answers = _ask_many(io, tag, [
        (f"Name for {kw}", "MyUnion" if kw == "union" else "MyType"),
        ("Comma-separated members (name:type)", "value:int"),
    ])
    if answers is EOI:
        return EOI
    name, members = answers
    mems = [_member(m) for m in split_csv(members) if m]
    ctx.declare_type(name)
    frag = Fragment()

    if kw == "union":
        fields = "".join(f"\n    {t} {n};" for n, t in mems)
        frag.top.append(f"union {name} {{{fields}\n}};")
        decl, var = ctx.declare(name, f"{name.lower()}_u", "{}")
        frag.body += [f"// ({tag}) Demonstrate union", decl]
        if mems:
            first = mems[0][0]
            frag.body.append(f"{var}.{first} = 123;")
            frag.body.append(f'cout << "{var}.{first} = " << {var}.{first} << endl;')
        return frag

    fields = "".join(f"    {t} {n};\n" for n, t in mems)
    args = ", ".join(f"{t} {n}_" for n, t in mems)
    inits = ", ".join(f"{n}({n}_)" for n, _ in mems)
    ctor = f"    {name}({args}) : {inits} {{}}\n" if mems else f"    {name}() {{}}\n"
    frag.top.append(f"{kw} {name} {{\npublic:\n{fields}{ctor}}};")

    samples = {"string": '"hi"', "double": "3.14", "bool": "true"}
    var = ctx.unique_name("obj")
    ctx.record(var, name)
    usage_args = ", ".join(samples.get(t, "0") for _, t in mems)
    frag.body += [f"// ({tag}) Demonstrate {kw}", f"{name} {var}({usage_args});" if mems else f"{name} {var};"]
    if mems:
        first = mems[0][0]
        frag.body.append(f'cout << "{var}.{first} = " << {var}.{first} << endl;')
    if any(t in ("string", "std::string") for _, t in mems):
        frag.includes.append("<string>")
    return frag


def handle_enum(io: Prompter, ctx: GenerationContext, kw: str, tag: str):
    answers = _ask_many(io, tag, [
        ("Enum name", "Color"),
        ("Comma-separated enumerators", "Red,Green,Blue"),
    ])
    if answers is EOI:
        return EOI
    name, items = answers
    enumerators = [e for e in split_csv(items) if e] or ["Value"]
    ctx.declare_type(name)
    decl, var = ctx.declare(name, "c", f"{name}::{enumerators[0]}")
    return Fragment(
        top=[f"enum class {name} {{ {', '.join(enumerators)} }};"],
        body=[
            f"// ({tag}) Demonstrate enum",
            decl,
            f"cout << static_cast<int>({var}) << endl;",
        ],
    )


def handle_template(io: Prompter, ctx: GenerationContext, kw: str, tag: str):
    kind = io.ask(f"[{tag}] Template kind ('function' or 'class')", "function")
    if kind is EOI:
        return EOI
    if kind == "class":
        answers = _ask_many(io, tag, [("Template class name", "Box"), ("Type parameter name", "T")])
        if answers is EOI:
            return EOI
        name, tparam = answers
        ctx.declare_type(name)
        var = ctx.unique_name("b")
        ctx.record(var, f"{name}<int>")
        return Fragment(
            top=[f"template <typename {tparam}>\n"
                 f"struct {name} {{ {tparam} value; {name}({tparam} v) : value(v) {{}} }};"],
            body=[
                f"// ({tag}) Demonstrate class template",
                f"{name}<int> {var}(5);",
                f"cout << {var}.value << endl;",
            ],
        )
    answers = _ask_many(io, tag, [("Template function name", "add"), ("Type parameter name", "T")])
    if answers is EOI:
        return EOI
    name, tparam = answers
    return Fragment(
        top=[f"template <typename {tparam}>\n{tparam} {name}({tparam} a, {tparam} b) {{ return a + b; }}"],
        body=[f"// ({tag}) Demonstrate function template", f"cout << {name}(2, 3) << endl;"],
    )


# ============================================================
# Control flow
# ============================================================

def handle_if(io: Prompter, ctx: GenerationContext, kw: str, tag: str):
    answers = _ask_many(io, tag, [
        ("Condition expression for if", f"{ctx.last_var} > 0" if ctx.last_var else "x > 0"),
        ("Then-branch (single statement)", 'cout << "then" << endl;'),
        ("Else-branch (single statement)", 'cout << "else" << endl;'),
    ])
    if answers is EOI:
        return EOI
    cond, then_stmt, else_stmt = answers
    return Fragment(body=[
        f"// ({tag}) Demonstrate if/else",
        f"if ({cond}) {{",
        f"    {then_stmt}",
        "} else {",
        f"    {else_stmt}",
        "}",
    ])


def handle_for(io: Prompter, ctx: GenerationContext, kw: str, tag: str):
    answers = _ask_many(io, tag, [
        ("Initializer for for-loop", "int i = 0"),
        ("Condition for for-loop", "i < 5"),
        ("Increment expression", "++i"),
        ("Body statement", "cout << i << endl;"),
    ])
    if answers is EOI:
        return EOI
    init, cond, incr, stmt = answers
    # the loop variable is scoped to the loop, so it is not recorded
    return Fragment(body=[
        f"// ({tag}) Demonstrate for loop",
        f"for ({init}; {cond}; {incr}) {{",
        f"    {stmt}",
        "}",
    ])


def _loop_variable(ctx: GenerationContext, init: str) -> tuple[str, str]:
    """Declare the loop counter from 'type name = value'; returns (statement, name)."""
    parsed = _split_declaration(init)
    if parsed is None:
        return init.rstrip(";") + ";", ""
    type_name, name, value = parsed
    return ctx.declare(type_name, name, value)


def handle_while(io: Prompter, ctx: GenerationContext, kw: str, tag: str):
    init = io.ask(f"[{tag}] Initializer (e.g., int n = 3)", "int n = 3")
    if init is EOI:
        return EOI
    decl, var = _loop_variable(ctx, init)
    var = var or "n"
    answers = _ask_many(io, tag, [("Condition", f"{var}-- > 0"), ("Loop body", f"cout << {var} << endl;")])
    if answers is EOI:
        return EOI
    cond, stmt = answers
    if kw == "do":
        return Fragment(body=[
            f"// ({tag}) Demonstrate do/while",
            decl,
            "do {",
            f"    {stmt}",
            f"}} while ({cond});",
        ])
    return Fragment(body=[
        f"// ({tag}) Demonstrate while",
        decl,
        f"while ({cond}) {{",
        f"    {stmt}",
        "}",
    ])


def handle_switch(io: Prompter, ctx: GenerationContext, kw: str, tag: str):
    init = io.ask(f"[{tag}] Initializer (e.g., int n = 2)", "int n = 2")
    if init is EOI:
        return EOI
    decl, var = _loop_variable(ctx, init)
    answers = _ask_many(io, tag, [
        ("Expression to switch on", var or "n"),
        ("Comma-separated case values", "1,2,3"),
    ])
    if answers is EOI:
        return EOI
    expr, cases = answers
    body = [f"// ({tag}) Demonstrate switch", decl, f"switch ({expr}) {{"]
    body += [f'    case {c}: cout << "case {c}" << endl; break;' for c in split_csv(cases) if c]
    body += ['    default: cout << "default" << endl; break;', "}"]
    return Fragment(body=body)


def handle_return(io: Prompter, ctx: GenerationContext, kw: str, tag: str):
    expr = io.ask(f"[{tag}] Expression to return from main", "0")
    if expr is EOI:
        return EOI
    return Fragment(body=[
        f"// ({tag}) Demonstrate return",
        f'cout << "About to return: " << ({expr}) << endl;',
        f"return {expr};",
    ])


def handle_try(io: Prompter, ctx: GenerationContext, kw: str, tag: str):
    msg = io.ask(f"[{tag}] Exception message to throw", "Something went wrong")
    if msg is EOI:
        return EOI
    return Fragment(
        includes=["<stdexcept>"],
        body=[
            f"// ({tag}) Demonstrate try/catch/throw",
            "try {",
            f'    throw std::runtime_error("{msg}");',
            "} catch (const std::exception& e) {",
            '    cout << "Caught: " << e.what() << endl;',
            "}",
        ],
    )


# ============================================================
# Expressions and compile-time features
# ============================================================

def handle_new(io: Prompter, ctx: GenerationContext, kw: str, tag: str):
    answers = _ask_many(io, tag, [("Type to allocate", "int"), ("Initial value", "42")])
    if answers is EOI:
        return EOI
    type_name, init = answers
    var = ctx.unique_name("p")
    ctx.record(var, f"{type_name}*")
    return Fragment(body=[
        f"// ({tag}) Demonstrate new/delete",
        f"{type_name}* {var} = new {type_name}({init});",
        f'cout << "*{var} = " << *{var} << endl;',
        f"delete {var};",
    ])


def handle_constexpr(io: Prompter, ctx: GenerationContext, kw: str, tag: str):
    expr = io.ask(f"[{tag}] Provide either a constexpr function or a constant expression",
                  "int square(int x){return x*x;}")
    if expr is EOI:
        return EOI
    if "{" in expr:
        head = expr.split("(", 1)[0].split()
        fname = head[-1] if head and "(" in expr else "f"
        return Fragment(
            top=[f"constexpr {expr}"],
            body=[f"// ({tag}) Demonstrate constexpr function", f"cout << {fname}(5) << endl;"],
        )
    decl, var = ctx.declare("constexpr auto", "v", expr)
    return Fragment(body=[f"// ({tag}) Demonstrate constexpr value", decl, f"cout << {var} << endl;"])


def handle_static_assert(io: Prompter, ctx: GenerationContext, kw: str, tag: str):
    answers = _ask_many(io, tag, [
        ("Condition to assert at compile time", "sizeof(int) >= 4"),
        ("Message for static_assert", "int_size_ok"),
    ])
    if answers is EOI:
        return EOI
    cond, msg = answers
    return Fragment(
        top=[f'static_assert({cond}, "{msg}");'],
        body=[
            f"// ({tag}) static_assert present above; runtime note:",
            'cout << "static_assert present; program compiled successfully" << endl;',
        ],
    )


def handle_sizeof(io: Prompter, ctx: GenerationContext, kw: str, tag: str):
    expr = io.ask(f"[{tag}] Expression or type to inspect", "int")
    if expr is EOI:
        return EOI
    return Fragment(
        includes=["<typeinfo>"],
        body=[
            f"// ({tag}) Demonstrate sizeof and typeid",
            f'cout << "sizeof({expr}) = " << sizeof({expr}) << endl;',
            f'cout << "typeid({expr}).name() = " << typeid({expr}).name() << endl;',
        ],
    )


def handle_alternative_token(io: Prompter, ctx: GenerationContext, kw: str, tag: str):
    if kw not in ("and", "or", "not"):
        return Fragment(body=[
            f"// ({tag}) Demonstrate alternative token: {kw}",
            f'cout << "Alternative token: {kw}" << endl;',
        ])
    default = f"{ctx.last_var} > 0 and true" if ctx.last_var else "a > 0 and b > 0"
    expr = io.ask(f"[{tag}] A simple Boolean expression (you may use alternative tokens)", default)
    if expr is EOI:
        return EOI
    decl_a, _ = ctx.declare("int", "a", "1")
    decl_b, _ = ctx.declare("int", "b", "2")
    return Fragment(body=[
        f"// ({tag}) Demonstrate alternative tokens like 'and'/'or'/'not'",
        decl_a,
        decl_b,
        f'if ({expr}) cout << "expression true" << endl; else cout << "expression false" << endl;',
    ])


# ============================================================
# Fallback
# ============================================================

def generic_handler(io: Prompter, ctx: GenerationContext, kw: str, tag: str,
                    entry_point: str = ENTRY_POINT):
    """Ask for a free-form fragment; a full program goes to the top level."""
    io.say(f"[{tag}] No tailored snippet for '{kw}'. Please paste a small code fragment.")
    lines = io.read_block(f"Finish the fragment with a single '{io.block_terminator}' on its own line:")
    if lines is EOI:
        return EOI
    if any(entry_point in line for line in lines):
        return Fragment(
            top=["\n".join(lines)],
            body=[f"// ({tag}) User provided a full program above; no extra main content added."],
        )
    return Fragment(body=list(lines))


# ============================================================
# Handler table
# ============================================================

def _table() -> dict[str, object]:
    table: dict[str, object] = {kw: handle_type for kw in _TYPE_DEFAULTS}
    table["auto"] = handle_auto
    table.update(dict.fromkeys(("if", "else"), handle_if))
    table["for"] = handle_for
    table.update(dict.fromkeys(("while", "do"), handle_while))
    table["switch"] = handle_switch
    table["return"] = handle_return
    table.update(dict.fromkeys(("class", "struct", "union"), handle_class))
    table["enum"] = handle_enum
    table["template"] = handle_template
    table.update(dict.fromkeys(("try", "catch", "throw"), handle_try))
    table.update(dict.fromkeys(("new", "delete"), handle_new))
    table["constexpr"] = handle_constexpr
    table["static_assert"] = handle_static_assert
    table.update(dict.fromkeys(("sizeof", "typeid"), handle_sizeof))
    table.update(dict.fromkeys(
        ("and", "or", "not", "xor", "bitand", "bitor", "compl", "not_eq", "and_eq", "or_eq", "xor_eq"),
        handle_alternative_token,
    ))
    return table


BUILTIN_HANDLERS = MappingProxyType(_table())
