"""Feature entities owned by the catalog service."""
