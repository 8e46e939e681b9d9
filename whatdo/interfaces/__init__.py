"""User-facing interfaces for whatdo."""
