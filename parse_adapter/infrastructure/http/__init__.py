from parse_adapter.infrastructure.http.adapter import ParseAdapter
from parse_adapter.infrastructure.http.path import resolve_path

__all__ = ["ParseAdapter", "resolve_path"]
