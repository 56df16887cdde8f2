"""Per-dialect rules and builder classes."""
