"""lunar-cli — extensible command dispatch framework.

Commands are registered cumulatively from the framework itself, from
installed or vendored packages, and from the hosting project.
"""

from lunar_cli.version import __version__

__all__: list[str] = ["__version__"]
