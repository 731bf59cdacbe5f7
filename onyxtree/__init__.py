"""Build, query and serialize XML and HTML node trees, with static fragments and placeholder templates."""

__version__ = "1.0.0"
__all__ = ["handle", "serialize", "node", "fragments", "templates"]