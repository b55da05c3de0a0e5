"""视频素材服务层：素材管理、平台搜索与转写分析。"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from agriscript.application.repositories.video_material_repository import (
    VideoMaterialRepository,
)
from agriscript.application.schemas.material import MaterialAnalyzeRequest, MaterialCreate
from agriscript.application.services.video_search_service import VideoSearchProvider
from agriscript.domain.entities.video_material import ProcessStatus, VideoMaterial
from agriscript.shared.config import Settings, get_settings
from agriscript.shared.constants.prompts import MATERIAL_ANALYSIS_PROMPT
from agriscript.shared.errors import (
    ERROR_MISSING_FIELD,
    AppError,
    bad_request,
    not_found,
    upstream_error,
)
from agriscript.shared.json_utils import extract_json_object
from agriscript.shared.logging import get_logger, log_extra

log = get_logger(__name__)


class MaterialService:
    """视频素材服务类。"""

    def __init__(
        self,
        repository: VideoMaterialRepository,
        *,
        search_provider: VideoSearchProvider | None = None,
        asr_service: Any | None = None,
        llm_runtime: Any | None = None,
        settings: Settings | None = None,
    ):
        self.repository = repository
        self.search_provider = search_provider
        self.asr_service = asr_service
        self.llm_runtime = llm_runtime
        self.settings = settings or get_settings()

    def list_materials(
        self, *, process_status: str | None, page: int, page_size: int
    ) -> tuple[list[VideoMaterial], int]:
        offset = (page - 1) * page_size
        items = self.repository.list(
            process_status=process_status, limit=page_size, offset=offset
        )
        return items, self.repository.count(process_status=process_status)

    def create_material(self, payload: MaterialCreate) -> VideoMaterial:
        material = VideoMaterial(
            id=str(uuid4()),
            process_status=ProcessStatus.PENDING.value,
            imported_to_knowledge=False,
            **payload.model_dump(),
        )
        return self.repository.create(material)

    def delete_material(self, material_id: str) -> None:
        if not self.repository.delete(material_id):
            raise not_found("素材不存在")

    def search_videos(self, keyword: str | None, *, page: int, page_size: int) -> dict[str, Any]:
        keyword = (keyword or "").strip()
        if not keyword:
            raise bad_request("关键词不能为空", code=ERROR_MISSING_FIELD)
        videos, total = self.search_provider.search(keyword, page, page_size)
        return {
            "videos": videos,
            "total": total,
            "page": page,
            "page_size": page_size,
            "keyword": keyword,
            "data_source": self.search_provider.data_source,
            "note": self.search_provider.note,
        }

    def analyze(self, payload: MaterialAnalyzeRequest) -> dict[str, Any]:
        """转写素材语音并做话术结构分析。

        失败时素材标记为 failed 并记录错误原因。
        """
        if not payload.material_id:
            raise AppError(code=ERROR_MISSING_FIELD, message="缺少素材ID", status_code=400)

        material = self.repository.get_by_id(payload.material_id)
        if material is None:
            raise not_found("素材不存在")

        media_url = payload.video_url or material.source_url
        if not media_url:
            raise bad_request("缺少可转写的音视频地址", code=ERROR_MISSING_FIELD)

        material.process_status = ProcessStatus.PROCESSING.value
        material.process_error = None
        self.repository.update(material)

        try:
            transcription = self.asr_service.transcribe(media_url)
            if not transcription:
                raise AppError(
                    code="empty_transcription",
                    message="语音识别结果为空",
                    status_code=422,
                )
            raw = self.llm_runtime.invoke(
                [{"role": "user", "content": MATERIAL_ANALYSIS_PROMPT + transcription}],
                temperature=self.settings.analysis_temperature,
            )
        except Exception as exc:
            message = exc.message if isinstance(exc, AppError) else str(exc)
            material.process_status = ProcessStatus.FAILED.value
            material.process_error = message
            self.repository.update(material)
            log.warning(
                "material.analyze_failed",
                extra=log_extra(material_id=material.id, error=message),
            )
            if isinstance(exc, AppError):
                raise
            raise upstream_error(
                f"素材分析失败: {message}", code="material_analysis_failed"
            ) from exc

        analysis = extract_json_object(raw)
        if analysis is None:
            analysis = {"rawAnalysis": raw, "parseError": True}

        material.audio_file_key = media_url
        material.transcription = transcription
        material.analysis_result = analysis
        material.process_status = ProcessStatus.COMPLETED.value
        self.repository.update(material)

        log.info(
            "material.analyzed",
            extra=log_extra(material_id=material.id, length=len(transcription)),
        )
        return {
            "material_id": material.id,
            "transcription": transcription,
            "analysis": analysis,
        }
