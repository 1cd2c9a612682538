"""Word-pair catalog used to hand out words at game start."""

from .catalog import WordCatalog, WordCatalogError, WordPair, load_default_pairs

__all__ = ['WordCatalog', 'WordCatalogError', 'WordPair', 'load_default_pairs']
