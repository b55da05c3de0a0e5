"""知识库仓储层：集合与文档。"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from agriscript.domain.entities.knowledge import KnowledgeCollection, KnowledgeDocument


class KnowledgeCollectionRepository:
    """知识库集合仓储类。"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, collection: KnowledgeCollection) -> KnowledgeCollection:
        """创建集合。"""
        self.db.add(collection)
        self.db.commit()
        self.db.refresh(collection)
        return collection

    def get_by_id(self, collection_id: str) -> KnowledgeCollection | None:
        """根据ID获取集合。"""
        return (
            self.db.query(KnowledgeCollection)
            .filter(KnowledgeCollection.id == collection_id)
            .first()
        )

    def list_active(self) -> list[KnowledgeCollection]:
        """列出启用中的集合。"""
        return (
            self.db.query(KnowledgeCollection)
            .filter(KnowledgeCollection.is_active.is_(True))
            .order_by(KnowledgeCollection.created_at.desc())
            .all()
        )

    def count_active_documents(self) -> dict[str, int]:
        """按集合统计有效文档数。"""
        rows = (
            self.db.query(KnowledgeDocument.collection_id, func.count(KnowledgeDocument.id))
            .filter(KnowledgeDocument.is_active.is_(True))
            .group_by(KnowledgeDocument.collection_id)
            .all()
        )
        return {collection_id: count for collection_id, count in rows}

    def update(self, collection: KnowledgeCollection) -> KnowledgeCollection:
        """更新集合。"""
        collection.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(collection)
        return collection


class KnowledgeDocumentRepository:
    """知识库文档仓储类。"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, document: KnowledgeDocument) -> KnowledgeDocument:
        """创建文档。"""
        self.db.add(document)
        self.db.commit()
        self.db.refresh(document)
        return document

    def get_by_id(self, document_id: str) -> KnowledgeDocument | None:
        """根据ID获取文档。"""
        return (
            self.db.query(KnowledgeDocument)
            .filter(KnowledgeDocument.id == document_id)
            .first()
        )

    def get_by_vector_ids(self, vector_doc_ids: list[str]) -> dict[str, KnowledgeDocument]:
        """按向量库文档ID批量回查，返回 vector_doc_id -> 文档 的映射。"""
        if not vector_doc_ids:
            return {}
        rows = (
            self.db.query(KnowledgeDocument)
            .filter(KnowledgeDocument.vector_doc_id.in_(set(vector_doc_ids)))
            .all()
        )
        return {row.vector_doc_id: row for row in rows if row.vector_doc_id}

    def list_active(
        self,
        collection_id: str,
        limit: int = 20,
        offset: int = 0,
    ) -> list[KnowledgeDocument]:
        """列出集合内的有效文档。"""
        return (
            self.db.query(KnowledgeDocument)
            .filter(
                KnowledgeDocument.collection_id == collection_id,
                KnowledgeDocument.is_active.is_(True),
            )
            .order_by(KnowledgeDocument.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count_active(self, collection_id: str) -> int:
        """统计集合内的有效文档数。"""
        return (
            self.db.query(KnowledgeDocument)
            .filter(
                KnowledgeDocument.collection_id == collection_id,
                KnowledgeDocument.is_active.is_(True),
            )
            .count()
        )

    def update(self, document: KnowledgeDocument) -> KnowledgeDocument:
        """更新文档。"""
        document.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(document)
        return document
