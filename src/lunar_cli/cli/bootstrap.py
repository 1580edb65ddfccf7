"""Console bootstrap — assembles the command set and runs it.

Steps, in strict order:

1. Detect the project root (or use the one given).
2. Load ``config/cli.json`` under the root; an absent file means defaults.
3. Run the configured startup hook, if any.
4. Resolve the configured command factory, if any.
5. Register the built-in commands.
6. Register package commands: entry points, then vendored packages.
7. Register the project's own command directories.
8. Dispatch ``argv``.

Because later tiers overwrite earlier ones by name, the tier order is
the override policy: project > package > built-in.

Discovery problems never abort the bootstrap.  An unresolvable hook or
factory is reported as a warning on stderr; missing directories and
unusable packages are logged and skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from lunar_cli.cli.application import Application
from lunar_cli.cli.commands import BUILTIN_COMMANDS, ConsoleCommandFactory
from lunar_cli.cli.console import Presenter, RenderOptions, get_rich_console
from lunar_cli.cli.log import apply_level
from lunar_cli.core.protocols import BootstrapHook, CommandFactory
from lunar_cli.core.registry import CommandRegistry
from lunar_cli.exceptions import (
    FactoryUnresolvableError,
    StartupHookUnresolvableError,
    TypeResolutionError,
)
from lunar_cli.infra.config import ConsoleConfig, load_config
from lunar_cli.infra.discovery import (
    DEFAULT_VENDOR_DIRS,
    ENTRY_POINT_GROUP,
    register_directory,
    register_entry_points,
    register_packages,
)
from lunar_cli.infra.loader import ensure_importable, resolve_type
from lunar_cli.infra.project_root import detect_project_root

logger = logging.getLogger(__name__)


class ConsoleBootstrap:
    """Builds an :class:`Application` from a project root.

    Parameters
    ----------
    root:
        Project root.  Detected from the current directory when ``None``.
    presenter:
        Presenter for command output (stdout).
    diagnostics:
        Presenter for bootstrap warnings (stderr).
    entry_point_group:
        Entry-point group scanned in the package tier.
    """

    def __init__(
        self,
        root: Path | None = None,
        *,
        presenter: Presenter | None = None,
        diagnostics: Presenter | None = None,
        options: RenderOptions | None = None,
        entry_point_group: str = ENTRY_POINT_GROUP,
    ) -> None:
        self.root: Path = root if root is not None else detect_project_root()
        self.options: RenderOptions = options or RenderOptions.from_environment()
        self.presenter: Presenter = presenter or Presenter(options=self.options)
        self.diagnostics: Presenter = diagnostics or Presenter(
            get_rich_console(stderr=True),
            self.options,
        )
        self.entry_point_group = entry_point_group
        self.config: ConsoleConfig = ConsoleConfig()

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def load(self) -> ConsoleConfig:
        ensure_importable(self.root)
        self.config = load_config(self.root)
        if self.config.log_level is not None and not apply_level(self.config.log_level):
            self._warn(f"Unknown log level in configuration: {self.config.log_level}")
        return self.config

    def run_startup_hook(self) -> bool:
        """Instantiate the configured hook and call ``boot()``.

        Returns ``True`` if a hook ran.
        """
        identifier = self.config.bootstrap
        if identifier is None:
            return False
        try:
            hook_class = resolve_type(identifier, BootstrapHook, StartupHookUnresolvableError)
        except StartupHookUnresolvableError as exc:
            self._warn(f"Bootstrap class not found: {identifier}", exc)
            return False

        logger.debug("Running startup hook %s", identifier)
        hook_class().boot()
        return True

    def build_factory(self) -> CommandFactory:
        """The configured factory, or the console's default one."""
        identifier = self.config.factory
        if identifier is not None:
            try:
                factory_class = resolve_type(identifier, CommandFactory, FactoryUnresolvableError)
            except FactoryUnresolvableError as exc:
                self._warn(f"Factory class not found: {identifier}", exc)
            else:
                logger.debug("Using command factory %s", identifier)
                return factory_class()
        return ConsoleCommandFactory(self.presenter)

    def register_builtin(self, registry: CommandRegistry) -> int:
        return registry.register_classes(BUILTIN_COMMANDS)

    def register_packages(self, registry: CommandRegistry) -> int:
        count = register_entry_points(registry, self.entry_point_group)
        vendor_dirs = (*DEFAULT_VENDOR_DIRS, *self.config.packages)
        return count + register_packages(registry, self.root, vendor_dirs)

    def register_project(self, registry: CommandRegistry) -> int:
        count = 0
        for namespace, directory in self.config.commands.items():
            path = self.root / directory.lstrip("/")
            if not path.is_dir():
                logger.warning("Project command directory %s does not exist", path)
                continue
            count += register_directory(registry, path, namespace)
        return count

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def build(self) -> Application:
        """Run steps 2 to 7 and return the assembled application."""
        self.load()
        self.run_startup_hook()

        registry = CommandRegistry(self.build_factory())
        builtin = self.register_builtin(registry)
        packages = self.register_packages(registry)
        project = self.register_project(registry)
        logger.debug(
            "Registered %d built-in, %d package and %d project command(s) from %s",
            builtin,
            packages,
            project,
            self.root,
        )

        return Application(
            self.config.name,
            self.config.version,
            registry=registry,
            presenter=self.presenter,
        )

    def run(self, argv: Sequence[str] | None = None) -> int:
        return self.build().run(argv)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _warn(self, message: str, exc: TypeResolutionError | None = None) -> None:
        logger.debug("%s%s", message, f" ({exc})" if exc is not None else "")
        self.diagnostics.warning(f"Warning: {message}")


def run_console(argv: Sequence[str] | None = None, root: Path | None = None) -> int:
    """Bootstrap the console for *root* and dispatch *argv*."""
    return ConsoleBootstrap(root).run(argv)
