"""``cli:completion`` — generate shell completion scripts.

The command lists whatever the registry holds at run time, so commands
contributed by packages and by the project are completed too.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from lunar_cli.cli import exit_codes
from lunar_cli.cli.commands.base import BaseCommand
from lunar_cli.core.command import command
from lunar_cli.core.registry import RegistryAware

SUPPORTED_SHELLS: tuple[str, ...] = ("bash", "zsh", "fish")
PROGRAM_NAMES: tuple[str, ...] = ("lunar", "bin/console", "console")
INSTALL_MARKER = "# Lunar CLI completion"


def detect_shell(environ: dict[str, str] | None = None) -> str:
    """Base name of ``$SHELL``, defaulting to ``bash``."""
    env = os.environ if environ is None else environ
    return Path(env.get("SHELL") or "/bin/bash").name


@command("cli:completion", "Generate the shell completion script")
class CompletionCommand(RegistryAware, BaseCommand):
    def execute(self, args: Sequence[str]) -> int:
        if self.wants_help(args):
            self.out.text(self.help())
            return exit_codes.SUCCESS

        keyed = self.parse_keyed(args)
        shell = str(self.option_value(keyed, "shell", detect_shell()))
        install = self.has_flag(args, "install")

        script = self.generate(shell)
        if script is None:
            self.out.error(f"Unsupported shell: {shell}")
            self.out.warning(f"Supported shells: {', '.join(SUPPORTED_SHELLS)}")
            return exit_codes.GENERAL_ERROR

        if install:
            return self.install(shell, script)

        self.out.text(script)
        return exit_codes.SUCCESS

    def help(self) -> str:
        return """\
Command: cli:completion
Generate the completion script for your shell.

Usage:
  lunar cli:completion [options]

Options:
  --shell=<shell>    Target shell (bash, zsh, fish). Detected from $SHELL if omitted.
  --install          Install the completion into your shell configuration
  --help             Show this help

Examples:
  lunar cli:completion                    # Print the script
  lunar cli:completion --shell=zsh        # Script for zsh
  lunar cli:completion --install          # Automatic installation
  eval "$(lunar cli:completion)"          # Manual activation"""

    # ------------------------------------------------------------------
    # Registry access
    # ------------------------------------------------------------------

    def command_names(self) -> list[str]:
        if self.registry is None:
            return []
        return self.registry.names()

    def command_descriptions(self) -> dict[str, str]:
        if self.registry is None:
            return {}
        return {entry.name: entry.description for entry in self.registry.entries()}

    # ------------------------------------------------------------------
    # Script generation
    # ------------------------------------------------------------------

    def generate(self, shell: str) -> str | None:
        if shell == "bash":
            return self.bash_script()
        if shell == "zsh":
            return self.zsh_script()
        if shell == "fish":
            return self.fish_script()
        return None

    def bash_script(self) -> str:
        words = " ".join(self.command_names())
        completes = "\n".join(f"complete -F _lunar_cli_completion {prog}" for prog in PROGRAM_NAMES)
        return f"""\
# Bash completion for Lunar CLI
# Add to ~/.bashrc: eval "$(lunar cli:completion --shell=bash)"

_lunar_cli_completion() {{
    local cur="${{COMP_WORDS[COMP_CWORD]}}"
    local commands="{words}"

    if [[ ${{COMP_CWORD}} -eq 1 ]]; then
        COMPREPLY=($(compgen -W "${{commands}}" -- "${{cur}}"))
    fi
}}

{completes}
"""

    def zsh_script(self) -> str:
        descriptions = self.command_descriptions()
        items = []
        for name in self.command_names():
            # zsh separates name and description with ':'; escape the ones in names.
            escaped_name = name.replace(":", "\\:")
            desc = descriptions.get(name, "").replace("'", "'\\''")
            items.append(f"'{escaped_name}:{desc}'")
        body = "\n        ".join(items)
        compdefs = "\n".join(f"compdef _lunar_cli_completion {prog}" for prog in PROGRAM_NAMES)
        return f"""\
# Zsh completion for Lunar CLI
# Add to ~/.zshrc: eval "$(lunar cli:completion --shell=zsh)"

_lunar_cli_completion() {{
    local -a commands
    commands=(
        {body}
    )

    _describe 'command' commands
}}

{compdefs}
"""

    def fish_script(self) -> str:
        descriptions = self.command_descriptions()
        lines = []
        for prog in PROGRAM_NAMES:
            for name in self.command_names():
                desc = descriptions.get(name, "").replace("\\", "\\\\").replace("'", "\\'")
                lines.append(f"complete -c {prog} -n '__fish_use_subcommand' -a '{name}' -d '{desc}'")
        erases = "\n".join(f"complete -c {prog} -e" for prog in PROGRAM_NAMES)
        body = "\n".join(lines)
        return f"""\
# Fish completion for Lunar CLI
# Save to ~/.config/fish/completions/lunar.fish

{erases}
{body}
"""

    # ------------------------------------------------------------------
    # Installation
    # ------------------------------------------------------------------

    def install(self, shell: str, script: str, home: Path | None = None) -> int:
        home = home or Path.home()

        if shell == "fish":
            target = home / ".config" / "fish" / "completions" / "lunar.fish"
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(script, encoding="utf-8")
            self.out.success(f"Completion installed in {target}")
            return exit_codes.SUCCESS

        target = home / (".bashrc" if shell == "bash" else ".zshrc")
        content = target.read_text(encoding="utf-8") if target.is_file() else ""
        if INSTALL_MARKER in content:
            self.out.warning(f"Completion already installed in {target}")
            return exit_codes.SUCCESS

        eval_line = f'eval "$(lunar cli:completion --shell={shell})"'
        with target.open("a", encoding="utf-8") as fh:
            fh.write(f"\n{INSTALL_MARKER}\n{eval_line}\n")
        self.out.success(f"Completion added to {target}")
        self.out.warning(f"Restart your shell or run: source {target}")
        return exit_codes.SUCCESS
