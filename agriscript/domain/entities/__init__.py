"""领域实体模块。"""

from .product import Product
from .style_template import StyleTemplate
from .script import Script
from .video_material import VideoMaterial
from .knowledge import KnowledgeCollection, KnowledgeDocument

__all__ = [
    "Product",
    "StyleTemplate",
    "Script",
    "VideoMaterial",
    "KnowledgeCollection",
    "KnowledgeDocument",
]
