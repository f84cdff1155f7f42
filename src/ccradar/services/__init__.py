"""Session engine and application services."""
