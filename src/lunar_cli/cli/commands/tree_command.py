"""``fs:tree`` — print a directory as a tree, a flat list, or JSON."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from lunar_cli.cli import exit_codes
from lunar_cli.cli.commands.base import BaseCommand
from lunar_cli.core.command import command

_ICONS: dict[str, str] = {
    "py": "🐍",
    "js": "📜",
    "ts": "📜",
    "json": "📋",
    "md": "📝",
    "txt": "📝",
    "rst": "📝",
    "yml": "⚙️",
    "yaml": "⚙️",
    "toml": "⚙️",
    "cfg": "⚙️",
    "css": "🎨",
    "scss": "🎨",
    "html": "🌐",
    "htm": "🌐",
    "jpg": "🖼️",
    "jpeg": "🖼️",
    "png": "🖼️",
    "gif": "🖼️",
    "svg": "🖼️",
    "webp": "🖼️",
    "pdf": "📕",
    "zip": "📦",
    "tar": "📦",
    "gz": "📦",
    "whl": "📦",
    "sh": "🔧",
    "bash": "🔧",
    "sql": "🗃️",
    "lock": "🔒",
}

_STYLES: dict[str, str] = {
    "py": "magenta",
    "js": "yellow",
    "ts": "yellow",
    "json": "cyan",
    "md": "white",
    "txt": "white",
    "yml": "green",
    "yaml": "green",
    "toml": "green",
    "css": "bright_magenta",
    "scss": "bright_magenta",
    "html": "bright_red",
    "htm": "bright_red",
    "lock": "bright_black",
}

DIRECTORY_ICON = "📁"
DEFAULT_ICON = "📄"
DIRECTORY_STYLE = "bold blue"


def file_icon(path: Path) -> str:
    if path.is_dir():
        return DIRECTORY_ICON
    return _ICONS.get(path.suffix.lower().lstrip("."), DEFAULT_ICON)


def file_style(path: Path) -> str | None:
    if path.is_dir():
        return DIRECTORY_STYLE
    return _STYLES.get(path.suffix.lower().lstrip("."))


@dataclass(frozen=True, slots=True)
class TreeOptions:
    max_depth: int | None = None
    """Number of levels shown below the root; ``None`` is unlimited."""

    files_only: bool = False
    dirs_only: bool = False
    nice: bool = False
    compact: bool = False


def _children(directory: Path) -> list[Path]:
    return sorted(directory.iterdir(), key=lambda p: p.name)


@command("fs:tree", "Print a recursive tree of files and directories")
class TreeCommand(BaseCommand):
    def execute(self, args: Sequence[str]) -> int:
        if self.wants_help(args):
            self.out.text(self.help())
            return exit_codes.SUCCESS

        keyed = self.parse_keyed(args)
        path = self.first_positional(args) or self.option_value(keyed, "path", ".")
        root = Path(str(path))

        depth_value = self.option_value(keyed, "depth")
        max_depth: int | None = None
        if depth_value is not None:
            try:
                max_depth = int(depth_value)
            except ValueError:
                self.out.error(f"Invalid depth '{depth_value}': expected an integer.")
                return exit_codes.GENERAL_ERROR

        if not root.is_dir():
            self.out.error(f"The path '{root}' is not a valid directory.")
            return exit_codes.GENERAL_ERROR

        if self.has_flag(args, "flat"):
            self.display_flat(root)
            return exit_codes.SUCCESS

        if self.has_flag(args, "json"):
            self.out.text(json.dumps(self.build_tree(root, max_depth), indent=4, ensure_ascii=False))
            return exit_codes.SUCCESS

        options = TreeOptions(
            max_depth=max_depth,
            files_only=self.has_flag(args, "files-only"),
            dirs_only=self.has_flag(args, "dirs-only"),
            nice=self.has_flag(args, "nice"),
            compact=self.has_flag(args, "compact"),
        )
        self.out.title(f"Explorer of: {root}")
        self.display_tree(root, options)
        return exit_codes.SUCCESS

    def help(self) -> str:
        return """\
Command: fs:tree

Description:
  Print the tree of a directory, with options to customise the output
  (depth, files or directories only, and so on).

Usage:
  lunar fs:tree [path] [--path=PATH] [--depth=N] [--files-only] [--dirs-only]
                [--nice] [--compact] [--flat] [--json] [--help]

Options:
  --path=PATH    Directory to explore when no positional path is given.
  --depth=N      Number of levels to show (N = positive integer).
  --files-only   Show files only.
  --dirs-only    Show directories only.
  --nice         Show icons and colours.
  --compact      Hide empty directories.
  --flat         Print a flat list of relative paths.
  --json         Print the tree as JSON.
  --help         Show this help.

Examples:
  lunar fs:tree
  lunar fs:tree /path/to/dir --depth=2 --files-only
  lunar fs:tree /path/to/dir --json
  lunar fs:tree /path/to/dir --flat

Notes:
  - The default path is the current directory ('.').
  - The default depth is unlimited.
  - --files-only and --dirs-only are mutually exclusive."""

    # ------------------------------------------------------------------
    # Flat listing
    # ------------------------------------------------------------------

    def display_flat(self, directory: Path, prefix: str = "") -> None:
        """Print every entry below *directory* as a relative path."""
        for child in _children(directory):
            relative = f"{prefix}/{child.name}" if prefix else child.name
            if child.is_dir():
                self.out.text(relative + "/")
                self.display_flat(child, relative)
            else:
                self.out.text(relative)

    # ------------------------------------------------------------------
    # Tree rendering
    # ------------------------------------------------------------------

    def _visible(self, path: Path, options: TreeOptions) -> bool:
        is_dir = path.is_dir()
        if options.files_only and is_dir:
            return False
        if options.dirs_only and not is_dir:
            return False
        if options.compact and is_dir:
            return any(path.iterdir())
        return True

    def display_tree(
        self,
        directory: Path,
        options: TreeOptions,
        prefix: str = "",
        depth: int = 1,
    ) -> None:
        if options.max_depth is not None and depth > options.max_depth:
            return

        unicode = self.out.options.unicode
        branch, last_branch = ("├── ", "└── ") if unicode else ("|-- ", "`-- ")
        pipe = "│   " if unicode else "|   "

        items = [child for child in _children(directory) if self._visible(child, options)]
        for index, item in enumerate(items):
            is_last = index == len(items) - 1
            is_dir = item.is_dir()
            label = item.name + ("/" if is_dir else "")

            connector = (prefix + (last_branch if is_last else branch), "cyan")
            if options.nice:
                self.out.segments(connector, (f"{file_icon(item)} {label}", file_style(item)))
            else:
                self.out.segments(connector, (label, None))

            if is_dir:
                self.display_tree(
                    item,
                    options,
                    prefix + ("    " if is_last else pipe),
                    depth + 1,
                )

    # ------------------------------------------------------------------
    # JSON structure
    # ------------------------------------------------------------------

    def build_tree(self, directory: Path, max_depth: int | None = None, depth: int = 1) -> dict[str, Any]:
        """Nested mapping: directories map to mappings, files to ``None``.

        Directories beyond *max_depth* appear as empty mappings.
        """
        if max_depth is not None and depth > max_depth:
            return {}

        structure: dict[str, Any] = {}
        for child in _children(directory):
            if child.is_dir():
                structure[child.name] = self.build_tree(child, max_depth, depth + 1)
            else:
                structure[child.name] = None
        return structure
