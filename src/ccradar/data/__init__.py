"""Usage-log discovery and loading."""
