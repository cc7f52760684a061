"""findimports: find the existing import and require bindings in a JavaScript or
TypeScript file that satisfy a desired import statement."""

__version__ = "0.3.0"

from findimports.core.resolver import resolve, resolve_names  # noqa: E402

__all__ = ["__version__", "resolve", "resolve_names"]
