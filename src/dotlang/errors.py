"""Exceptions raised by dotlang."""

from __future__ import annotations


class DotError(Exception):
    """Base class for every error raised by this package."""


class InvalidAstError(DotError, ValueError):
    """An AST value was constructed with arguments that break its invariants."""


class DotParseError(DotError, ValueError):
    """The source text does not match the grammar.

    ``offset`` is the character index of the furthest position the parser
    reached; ``line`` and ``column`` are 1-based and derived from it.
    """

    def __init__(self, src: str, offset: int, rule: str, expected: frozenset[str]) -> None:
        self.src = src
        self.offset = offset
        self.rule = rule
        self.expected = expected
        self.line = src.count("\n", 0, offset) + 1
        self.column = offset - (src.rfind("\n", 0, offset) + 1) + 1
        super().__init__(self._describe())

    def _describe(self) -> str:
        found = repr(self.src[self.offset]) if self.offset < len(self.src) else "end of input"
        wanted = ", ".join(sorted(self.expected)) or "nothing"
        return f"{self.line}:{self.column}: expected {wanted} in {self.rule}, found {found}"

    def snippet(self) -> str:
        """The offending source line with a caret under the error column."""
        start = self.src.rfind("\n", 0, self.offset) + 1
        end = self.src.find("\n", self.offset)
        line = self.src[start : end if end != -1 else len(self.src)]
        return f"{line}\n{' ' * (self.column - 1)}^"


class DotExecError(DotError):
    """Running the graphviz binary failed."""

    def __init__(self, message: str, returncode: int | None = None, stderr: bytes = b"") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
