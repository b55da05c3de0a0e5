"""领域层（Domain）。"""

from .entities import (
    KnowledgeCollection,
    KnowledgeDocument,
    Product,
    Script,
    StyleTemplate,
    VideoMaterial,
)

__all__ = [
    "Product",
    "StyleTemplate",
    "Script",
    "VideoMaterial",
    "KnowledgeCollection",
    "KnowledgeDocument",
]
