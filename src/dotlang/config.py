"""Centralized configuration for dotlang."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PrinterContext:
    """Formatting settings and indentation state for one print call.

    ``current_indent`` is advanced and restored by the printer while it walks
    nested bodies, so a context must not be shared between concurrent calls.
    """

    indent_step: int = 2
    current_indent: int = 0
    line_separator: str = "\n"
    always_inline: bool = False
    use_semicolons: bool = False
    # edges whose one-line rendering fits are never broken across lines
    inline_size_threshold: int = 90


@dataclass
class ExecConfig:
    """Configuration for invoking the graphviz binary."""

    binary: str = "dot"
    timeout: float | None = None
