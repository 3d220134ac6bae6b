"""Tree model: the category page cache behind category nodes."""

from .tree_model import PrsTreeModel, category_cache_id

__all__ = [
    'PrsTreeModel',
    'category_cache_id',
]
