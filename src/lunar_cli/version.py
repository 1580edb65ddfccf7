"""Single source of truth for the lunar-cli version string."""

__version__ = "1.0.0"
