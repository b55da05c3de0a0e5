"""视频素材仓储层。"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from agriscript.domain.entities.video_material import VideoMaterial


class VideoMaterialRepository:
    """视频素材仓储类。"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, material: VideoMaterial) -> VideoMaterial:
        """创建素材。"""
        self.db.add(material)
        self.db.commit()
        self.db.refresh(material)
        return material

    def get_by_id(self, material_id: str) -> VideoMaterial | None:
        """根据ID获取素材。"""
        return (
            self.db.query(VideoMaterial).filter(VideoMaterial.id == material_id).first()
        )

    def list(
        self,
        process_status: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[VideoMaterial]:
        """列出素材。"""
        query = self.db.query(VideoMaterial)
        if process_status is not None:
            query = query.filter(VideoMaterial.process_status == process_status)
        return (
            query.order_by(VideoMaterial.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count(self, process_status: str | None = None) -> int:
        """统计素材数量。"""
        query = self.db.query(VideoMaterial)
        if process_status is not None:
            query = query.filter(VideoMaterial.process_status == process_status)
        return query.count()

    def update(self, material: VideoMaterial) -> VideoMaterial:
        """更新素材。"""
        material.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(material)
        return material

    def delete(self, material_id: str) -> bool:
        """删除素材。"""
        material = self.get_by_id(material_id)
        if material is None:
            return False

        self.db.delete(material)
        self.db.commit()
        return True
