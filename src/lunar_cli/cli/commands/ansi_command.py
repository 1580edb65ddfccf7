"""``style:ansi`` — show the colours and text styles the terminal renders."""

from __future__ import annotations

from collections.abc import Sequence

from lunar_cli.cli import exit_codes
from lunar_cli.cli.commands.base import BaseCommand
from lunar_cli.core.command import command

BASIC_COLORS: tuple[str, ...] = (
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
)

TEXT_STYLES: tuple[tuple[str, str], ...] = (
    ("Bold text", "bold"),
    ("Underlined text", "underline"),
    ("Reversed text", "reverse"),
    ("Dim text", "dim"),
    ("Italic text", "italic"),
)


@command("style:ansi", "Show every supported ANSI colour")
class AnsiDemoCommand(BaseCommand):
    def execute(self, args: Sequence[str]) -> int:
        if self.wants_help(args):
            self.out.text(self.help())
            return exit_codes.SUCCESS

        self.out.title("ANSI palette")

        self.out.subtitle("Text colours")
        for code, color in enumerate(BASIC_COLORS, start=30):
            self.out.segments((f"Code {code} -> {color} text", color))

        self.out.subtitle("Text styles")
        for label, style in TEXT_STYLES:
            self.out.segments((label, style))

        self.out.subtitle("Background colours")
        for code, color in enumerate(BASIC_COLORS, start=40):
            self.out.segments((f"Background {code}", f"on {color}"))

        self.out.subtitle("Combined (text + background)")
        self.out.segments(("Red text on yellow", "red on yellow"))
        self.out.segments(("Green text on blue", "green on blue"))

        self.out.success("Demo complete!")
        return exit_codes.SUCCESS

    def help(self) -> str:
        return """\
Command: style:ansi
Show every supported ANSI colour.

Usage:
  lunar style:ansi [--help]

Options:
  --help         Show this help

Description:
  Prints the text colours, styles and background colours rendered by
  the terminal. Useful to check which styles are available.

Examples:
  lunar style:ansi
  lunar style:ansi --help"""
