"""CLI utilities (XDG paths, container lifecycle)."""
