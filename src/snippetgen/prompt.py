# -------------------------------------
# interactive input
# -------------------------------------
"""
Blocking line input for the REPL and the keyword handlers.

End of input is reported by returning the EOI sentinel instead of raising;
callers check `answer is EOI` and return early.
"""
from __future__ import annotations

import sys
from typing import TextIO


class EndOfInput:
    def __repr__(self) -> str:
        return "EOI"

    def __bool__(self) -> bool:
        return False


EOI = EndOfInput()


class Prompter:
    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None,
                 block_terminator: str = "."):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.block_terminator = block_terminator

    def say(self, text: str = "") -> None:
        print(text, file=self.stdout)

    def read_line(self, prompt: str = "") -> str | EndOfInput:
        """Read one line without its newline, or EOI at end of input."""
        if prompt:
            self.stdout.write(prompt)
            self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            return EOI
        return line.rstrip("\r\n")

    def ask(self, prompt: str, default: str) -> str | EndOfInput:
        """Prompt with a pre-filled default; an empty answer keeps it."""
        answer = self.read_line(f"{prompt} [{default}]: ")
        if answer is EOI:
            return EOI
        return answer if answer else default

    def read_block(self, instruction: str = "") -> list[str] | EndOfInput:
        """Read lines until one equal to the block terminator (not included)."""
        if not instruction:
            instruction = f"Enter lines, finish with a single '{self.block_terminator}' on its own line:"
        self.say(instruction)
        lines: list[str] = []
        while True:
            line = self.read_line("> ")
            if line is EOI:
                return EOI
            if line == self.block_terminator:
                return lines
            lines.append(line)
