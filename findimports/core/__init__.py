"""
Core import resolution for findimports: the tagged node model, the query
collection over it, statement templates and the resolver itself.
"""
from .resolver import resolve, resolve_names, find_import, collect_candidates
from .template import statement, statements

__all__ = ["resolve", "resolve_names", "find_import", "collect_candidates", "statement", "statements"]
