"""coqdep-paths - logical load-path resolution for coqdep-style dependency tools."""

__version__ = "0.1.0"
