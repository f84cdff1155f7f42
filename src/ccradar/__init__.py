"""ccradar: Claude Code usage sessions, burn rate and quota status."""

__version__ = "0.1.0"
