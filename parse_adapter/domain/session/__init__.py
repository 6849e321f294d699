"""Current-user session management."""
