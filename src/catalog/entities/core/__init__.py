"""Core entities shared by every feature (identity and base classes)."""
