"""Run the graphviz command line tool on a graph.

The graph is printed to DOT text, written to a temporary file and handed to
the configured binary (``dot`` by default) together with the command
arguments. Needs a graphviz installation on the PATH:

    exec_dot(g, PrinterContext(), [FormatArg(Format.Svg)])
    exec_dot(g, PrinterContext(), [FormatArg(Format.Png), OutputArg("g.png")])
"""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Union

from dotlang.config import ExecConfig, PrinterContext
from dotlang.errors import DotExecError
from dotlang.ir.ast import Graph
from dotlang.printer import print_dot

logger = logging.getLogger(__name__)


class Layout(Enum):
    Dot = "dot"
    Neato = "neato"
    Twopi = "twopi"
    Circo = "circo"
    Fdp = "fdp"
    Osage = "osage"
    Patchwork = "patchwork"
    Sfdp = "sfdp"


class Format(Enum):
    Bmp = "bmp"
    Canon = "canon"
    Dot = "dot"
    Gv = "gv"
    Xdot = "xdot"
    Xdot12 = "xdot1.2"
    Xdot14 = "xdot1.4"
    Eps = "eps"
    Fig = "fig"
    Gif = "gif"
    Ico = "ico"
    Cmap = "cmap"
    Cmapx = "cmapx"
    CmapxNp = "cmapx_np"
    Imap = "imap"
    ImapNp = "imap_np"
    Ismap = "ismap"
    Jpg = "jpg"
    Jpeg = "jpeg"
    Json = "json"
    Json0 = "json0"
    DotJson = "dot_json"
    XdotJson = "xdot_json"
    Pdf = "pdf"
    Pic = "pic"
    Plain = "plain"
    PlainExt = "plain-ext"
    Png = "png"
    Ps = "ps"
    Ps2 = "ps2"
    Svg = "svg"
    Svgz = "svgz"
    Tif = "tif"
    Tiff = "tiff"
    Vml = "vml"
    Webp = "webp"


@dataclass(frozen=True)
class FormatArg:
    format: Format

    def prepare(self) -> str:
        return f"-T{self.format.value}"


@dataclass(frozen=True)
class LayoutArg:
    layout: Layout

    def prepare(self) -> str:
        return f"-K{self.layout.value}"


@dataclass(frozen=True)
class OutputArg:
    path: str

    def prepare(self) -> str:
        return f"-o{self.path}"


@dataclass(frozen=True)
class CustomArg:
    """Passed through verbatim, so any ``-`` prefix must be included."""

    value: str

    def prepare(self) -> str:
        return self.value


CommandArg = Union[FormatArg, LayoutArg, OutputArg, CustomArg]


def exec_dot(
    graph: Graph,
    ctx: PrinterContext | None,
    args: Sequence[CommandArg],
    config: ExecConfig | None = None,
) -> bytes:
    """Render ``graph`` with graphviz and return what the binary wrote to stdout.

    With an OutputArg graphviz writes the file itself and stdout is usually
    empty.

    Raises:
        DotExecError: The binary is missing, could not be started, timed out
            or exited with a non-zero status.
    """
    config = config if config is not None else ExecConfig()
    text = print_dot(graph, ctx)
    with tempfile.NamedTemporaryFile("w", suffix=".gv", delete=False, encoding="utf-8") as f:
        f.write(text)
        path = f.name
    command = [config.binary, *(a.prepare() for a in args), path]
    logger.debug("running %s", " ".join(command))
    try:
        result = subprocess.run(command, capture_output=True, timeout=config.timeout)
    except FileNotFoundError as e:
        raise DotExecError(f"graphviz binary '{config.binary}' not found") from e
    except subprocess.TimeoutExpired as e:
        raise DotExecError(f"'{config.binary}' timed out after {config.timeout}s") from e
    except OSError as e:
        raise DotExecError(f"cannot run '{config.binary}': {e}") from e
    finally:
        os.unlink(path)

    if result.returncode != 0:
        message = result.stderr.decode("utf-8", errors="replace").strip()
        raise DotExecError(
            f"'{config.binary}' exited with status {result.returncode}: {message}",
            returncode=result.returncode,
            stderr=result.stderr,
        )
    return result.stdout
