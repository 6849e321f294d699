"""Domain layer: records, store and sessions."""
