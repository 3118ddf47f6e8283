# -------------------------------------
# interactive loop and CLI
# -------------------------------------
"""
The snippetgen REPL.

Lines starting with ':' are commands (define/edit/list/show/remove custom
keywords, help); 'exit' or 'quit' leaves; anything else is a keyword line
handed to the generation pipeline.

Usage:
    python -m snippetgen [--store user_keywords.db] [--config snippetgen.yml]
"""
from __future__ import annotations

import argparse
import sys

from .config import Config, load_config
from .dispatch import generate_line
from .errors import SnippetError
from .handlers import BUILTIN_HANDLERS
from .keywords import BUILTIN_KEYWORDS, keyword_rows
from .prompt import EOI, Prompter
from .store import MacroDefinition, MacroStore
from .tokens import format_params, normalize_token, parse_params

BANNER = """\
C++17 keyword-driven snippet generator
Enter a line containing C++17 keywords (duplicates allowed). Every
occurrence is asked about in order, then one integrated program is printed.
Type :help for commands, 'exit' or EOF to quit.
"""

COMMANDS = """\
Commands:
  :add / :define     - define a new custom keyword with parameters
  :edit <keyword>    - change defaults, parameters or body of a custom keyword
  :list              - list stored custom keywords
  :show <keyword>    - print a custom keyword's parameters and body
  :remove <keyword>  - remove a stored custom keyword
  :help              - show this help (includes C++ standard keywords)
"""


def _error(msg: str) -> None:
    print(f"snippetgen error: {msg}", file=sys.stderr)


class Repl:
    def __init__(self, store: MacroStore, io: Prompter | None = None, config: Config | None = None,
                 handlers=BUILTIN_HANDLERS):
        self.store = store
        self.config = config or Config()
        self.io = io or Prompter(block_terminator=self.config.block_terminator)
        self.handlers = handlers

    # ------------------------------------------------------------
    # loop
    # ------------------------------------------------------------

    def run(self) -> int:
        self.io.say(BANNER)
        while True:
            line = self.io.read_line("Enter keyword(s)> ")
            if line is EOI:
                self.io.say("\nEOF received at top-level. Exiting cleanly.")
                return 0
            if not self.handle_line(line):
                return 0

    def handle_line(self, line: str) -> bool:
        """Process one top-level line; False means stop."""
        text = line.strip()
        if not text:
            return True
        if text.startswith(":"):
            self.command(text)
            return True
        if text in ("exit", "quit"):
            self.io.say("Exit requested. Goodbye.")
            return False

        program = generate_line(text, self.store, self.io, self.handlers, self.config)
        if program is None:
            self.io.say("No recognized C++17 or custom keyword found in the input. Try again.")
        elif program is EOI:
            self.io.say("\nEOF received during follow-up prompts. Line cancelled.")
        else:
            self.io.say("\n--- Generated C++17 program (single integrated example) ---")
            self.io.say(program)
            self.io.say("Copy the program into a .cpp file and compile: g++ -std=c++17 yourfile.cpp\n")
        return True

    def command(self, text: str) -> None:
        cmd, _, arg = text.partition(" ")
        arg = arg.strip()
        if cmd in (":add", ":define"):
            self.define()
        elif cmd == ":edit":
            self.edit(arg)
        elif cmd == ":list":
            self.list_keywords()
        elif cmd == ":show":
            self.show(arg)
        elif cmd == ":remove":
            self.remove(arg)
        elif cmd == ":help":
            self.help()
        else:
            self.io.say(f"Unknown command '{cmd}'. Type :help for commands.")

    def _report_save(self, ok: bool, done: str) -> None:
        if ok:
            self.io.say(f"{done} and saved to {self.store.path}.")
        else:
            _error(f"{done} but failed to save to {self.store.path}; the change is kept for this session.")

    # ------------------------------------------------------------
    # commands
    # ------------------------------------------------------------

    def define(self) -> None:
        name = self.io.ask("Keyword name to define (single word, no punctuation)", "mykw")
        if name is EOI:
            self.io.say("\nEOF during custom keyword definition. Cancelled.")
            return
        name = normalize_token(name)
        if not name:
            self.io.say("Empty keyword name; aborting.")
            return
        if name in BUILTIN_KEYWORDS:
            self.io.say(f"'{name}' conflicts with a built-in C++17 keyword. Choose another name.")
            return

        overwrite = False
        if name in self.store:
            answer = self.io.ask("Keyword already exists. Overwrite? (y/n)", "n")
            if answer is EOI or answer.lower() != "y":
                self.io.say("Aborted.")
                return
            overwrite = True

        params_line = self.io.ask("Provide parameters (format: name=default,other=val) or leave blank", "")
        if params_line is EOI:
            self.io.say("\nEOF during custom keyword definition. Cancelled.")
            return
        self.io.say("Paste the snippet for this custom keyword. You may use placeholders {name}.")
        lines = self.io.read_block(f"End with a single '{self.io.block_terminator}' line:")
        if lines is EOI:
            self.io.say("\nEOF during custom keyword definition. Cancelled.")
            return

        macro = MacroDefinition.create(parse_params(params_line), "".join(line + "\n" for line in lines))
        try:
            ok = self.store.register(name, macro, overwrite=overwrite)
        except SnippetError as e:
            self.io.say(str(e))
            return
        self._report_save(ok, f"Custom keyword '{name}' defined with {len(macro.params)} parameter(s)")

    def edit(self, arg: str) -> None:
        name = normalize_token(arg)
        macro = self.store.get(name) if name else None
        if macro is None:
            self.io.say(f"No such custom keyword: '{name}'." if name else "Usage: :edit <keyword>")
            return

        self.show(name)
        action = self.io.ask("Edit what? (default/add/drop/body)", "default")
        if action is EOI:
            self.io.say("\nEOF during edit. Cancelled.")
            return

        try:
            if action == "default":
                pname = self.io.ask("Parameter name", macro.params[0][0] if macro.params else "")
                if pname is EOI:
                    return
                value = self.io.ask(f"New default for '{pname}'", macro.default(pname) or "")
                if value is EOI:
                    return
                updated = macro.with_default(pname, value.strip())
            elif action == "add":
                spec = self.io.ask("New parameter (name=default)", "")
                if spec is EOI:
                    return
                parsed = parse_params(spec)
                if not parsed:
                    self.io.say("No parameter given; nothing changed.")
                    return
                updated = macro
                for pname, default in parsed:
                    updated = updated.with_param(pname, default)
            elif action == "drop":
                pname = self.io.ask("Parameter to drop", "")
                if pname is EOI:
                    return
                updated = macro.without_param(pname)
            elif action == "body":
                lines = self.io.read_block(f"New body; end with a single '{self.io.block_terminator}' line:")
                if lines is EOI:
                    self.io.say("\nEOF during edit. Cancelled.")
                    return
                updated = macro.with_body("".join(line + "\n" for line in lines))
            else:
                self.io.say(f"Unknown edit action '{action}'.")
                return
        except KeyError as e:
            self.io.say(f"No parameter {e} on '{name}'.")
            return
        except SnippetError as e:
            self.io.say(f"{e}; nothing changed.")
            return

        self._report_save(self.store.update(name, updated), f"Custom keyword '{name}' updated")

    def list_keywords(self) -> None:
        if not len(self.store):
            self.io.say("No custom keywords stored.")
            return
        self.io.say("Stored custom keywords and parameters:")
        for name, macro in self.store.items():
            params = f" (params: {format_params(macro.params).replace(',', ', ')})" if macro.params else ""
            self.io.say(f"  - {name}{params}")

    def show(self, arg: str) -> None:
        name = normalize_token(arg)
        macro = self.store.get(name) if name else None
        if macro is None:
            self.io.say(f"No such custom keyword: '{name}'." if name else "Usage: :show <keyword>")
            return
        self.io.say(f"{name}: params [{format_params(macro.params)}]")
        for line in macro.body.splitlines():
            self.io.say(f"  | {line}")

    def remove(self, arg: str) -> None:
        name = normalize_token(arg)
        if not name:
            self.io.say("Usage: :remove <keyword>")
            return
        if name not in self.store:
            self.io.say(f"No such custom keyword: '{name}'.")
            return
        self._report_save(self.store.remove(name), f"Removed '{name}'")

    def help(self) -> None:
        self.io.say(COMMANDS)
        self.io.say("C++17 standard keywords:")
        for row in keyword_rows(BUILTIN_KEYWORDS):
            self.io.say(row)
        self.io.say()


# ============================================================
# CLI
# ============================================================

def _main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Keyword-driven C++17 snippet generator.")
    p.add_argument("--store", "-s", metavar="PATH", help="Custom keyword file (default from config, else user_keywords.db)")
    p.add_argument("--config", "-c", metavar="PATH", help="YAML config file (default: snippetgen.yml if present)")
    p.add_argument("--list", "-l", action="store_true", help="List custom keywords and exit")
    p.add_argument("--keywords", "-k", action="store_true", help="List builtin keywords and exit")
    args = p.parse_args(argv)

    try:
        config = load_config(args.config)
    except (SnippetError, OSError) as e:
        _error(str(e))
        return 2

    if args.keywords:
        for row in keyword_rows(BUILTIN_KEYWORDS):
            print(row)
        return 0

    store = MacroStore.open(args.store or config.store, BUILTIN_KEYWORDS)
    repl = Repl(store, Prompter(block_terminator=config.block_terminator), config)

    if args.list:
        repl.list_keywords()
        return 0

    return repl.run()


if __name__ == "__main__":
    raise SystemExit(_main())
