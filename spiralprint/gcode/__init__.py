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
from spiralprint.gcode.writer import CommandBuffer, GCodeWriter, render_command, render_program

__all__ = [
    "AbsoluteExtrusionMode",
    "Command",
    "Comment",
    "ExtrudeMove",
    "FeedMove",
    "Home",
    "SetAbsoluteFeed",
    "SetBedTemp",
    "SetFan",
    "SetHotendTemp",
    "Travel",
    "CommandBuffer",
    "GCodeWriter",
    "render_command",
    "render_program",
]
