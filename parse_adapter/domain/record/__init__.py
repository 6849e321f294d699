"""Records, models and the store."""
