"""Command sinks and the G-code renderer.

A sink is anything with ``emit(command)``. :class:`CommandBuffer` keeps
commands in memory; :class:`GCodeWriter` additionally renders and appends
them to a ``.gcode`` file on :meth:`GCodeWriter.flush`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from spiralprint.errors import IOFailure
from spiralprint.gcode.commands import (
    AbsoluteExtrusionMode,
    Command,
    Comment,
    ExtrudeMove,
    FeedMove,
    Home,
    SetAbsoluteFeed,
    SetBedTemp,
    SetFan,
    SetHotendTemp,
    Travel,
)

logger = logging.getLogger(__name__)


def render_command(cmd: Command) -> str:
    """Render a single command as one line of G-code (no newline)."""
    if isinstance(cmd, Travel):
        return f"G0 X{cmd.x:.3f} Y{cmd.y:.3f} Z{cmd.z:.3f} F{cmd.feedrate:.0f}"
    if isinstance(cmd, ExtrudeMove):
        return (
            f"G1 X{cmd.x:.3f} Y{cmd.y:.3f} Z{cmd.z:.3f} "
            f"E{cmd.feed:.5f} F{cmd.feedrate:.0f}"
        )
    if isinstance(cmd, FeedMove):
        return f"G1 E{cmd.feed:.5f} F{cmd.feedrate:.0f}"
    if isinstance(cmd, SetAbsoluteFeed):
        return f"G92 E{cmd.value:.5f}"
    if isinstance(cmd, Comment):
        return f"; {cmd.text}"
    if isinstance(cmd, SetHotendTemp):
        return f"{'M109' if cmd.wait else 'M104'} S{cmd.temp:.0f}"
    if isinstance(cmd, SetBedTemp):
        return f"{'M190' if cmd.wait else 'M140'} S{cmd.temp:.0f}"
    if isinstance(cmd, SetFan):
        return f"M106 S{cmd.value:d}"
    if isinstance(cmd, Home):
        return "G28"
    if isinstance(cmd, AbsoluteExtrusionMode):
        return "M82"
    raise TypeError(f"Unknown command: {cmd!r}")


def render_program(commands: Iterable[Command]) -> str:
    """Render commands as a newline-terminated G-code program."""
    return "".join(render_command(cmd) + "\n" for cmd in commands)


class CommandBuffer:
    """Append-only in-memory sink."""

    def __init__(self) -> None:
        self.commands: list[Command] = []

    def emit(self, cmd: Command) -> None:
        self.commands.append(cmd)

    def drain(self) -> list[Command]:
        """Return all buffered commands and empty the buffer."""
        commands, self.commands = self.commands, []
        return commands

    def __len__(self) -> int:
        return len(self.commands)


class GCodeWriter(CommandBuffer):
    """Sink that writes rendered G-code to ``path``.

    The file is truncated on construction; each :meth:`flush` appends the
    buffered commands and clears the buffer.
    """

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)
        self.lines_written = 0
        try:
            self.path.write_text("")
        except OSError as exc:
            raise IOFailure(f"cannot create {self.path}: {exc}") from exc

    def flush(self) -> int:
        """Write buffered commands to the file.

        Returns
        -------
        Number of lines written by this call.

        Raises
        ------
        IOFailure
            If the file cannot be written. The buffer is left untouched.
        """
        text = render_program(self.commands)
        try:
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(text)
        except OSError as exc:
            raise IOFailure(f"cannot write {self.path}: {exc}") from exc

        count = len(self.commands)
        self.commands = []
        self.lines_written += count
        logger.info("flushed %d commands to %s", count, self.path)
        return count
