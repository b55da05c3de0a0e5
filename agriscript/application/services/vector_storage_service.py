"""向量存储服务。

使用 ChromaDB 单集合存储知识库文档切片，余弦距离检索：
- 文档按空行切分为不超过 chunk_size 的片段后批量写入
- 片段元数据记录所属文档 `doc_id` 与知识库集合 `collection_id`
- 检索得分为余弦相似度（1 - distance），低于阈值的片段被过滤

`search` 以 `{code, msg, chunks}` 返回结果，`code != 0` 表示检索失败，
调用方据此决定降级策略。
"""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Any, Callable

import chromadb
from chromadb.config import Settings as ChromaSettings
from langchain_openai import OpenAIEmbeddings
from llama_index.core.node_parser import SentenceSplitter

from agriscript.shared.config import Settings, get_settings
from agriscript.shared.errors import AppError
from agriscript.shared.logging import get_logger, log_extra

log = get_logger(__name__)

SEARCH_OK = 0
SEARCH_FAILED = 1


class VectorStorageError(AppError):
    """向量存储错误。"""

    def __init__(
        self,
        message: str,
        status_code: int = 502,
        code: str = "vector_storage_error",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            status_code=status_code,
            code=code,
            details=details,
        )


class VectorStorageService:
    """使用 ChromaDB 的向量存储服务。"""

    # 批量操作大小
    BATCH_SIZE = 100

    def __init__(
        self,
        persist_directory: str | Path | None = None,
        collection_name: str | None = None,
        embedding_model: Any | None = None,
        text_splitter: Callable[[str], list[str]] | None = None,
        client: Any | None = None,
        settings: Settings | None = None,
    ):
        """初始化向量存储服务。

        Args:
            persist_directory: ChromaDB 持久化目录
            collection_name: 集合名称
            embedding_model: 提供 embed_documents/embed_query 的嵌入模型
            text_splitter: 文本切分函数，缺省使用 SentenceSplitter
            client: 预先构建的 ChromaDB 客户端
        """
        self.settings = settings or get_settings()
        self.persist_directory = Path(
            persist_directory or self.settings.storage_root / "chroma"
        )
        self.collection_name = collection_name or self.settings.knowledge_collection_name

        self._client = client
        self._embedding_model = embedding_model
        self._text_splitter = text_splitter

    def _get_client(self):
        """获取 ChromaDB 客户端。"""
        if self._client is None:
            self.persist_directory.mkdir(parents=True, exist_ok=True)
            self._client = chromadb.PersistentClient(
                path=str(self.persist_directory),
                settings=ChromaSettings(anonymized_telemetry=False),
            )
        return self._client

    def _get_collection(self):
        return self._get_client().get_or_create_collection(
            name=self.collection_name,
            metadata={"hnsw:space": "cosine"},
            embedding_function=None,
        )

    def _get_embed_model(self):
        """获取嵌入模型（未注入时按配置构建 OpenAI 兼容的嵌入模型）。"""
        if self._embedding_model is not None:
            return self._embedding_model

        api_key = self.settings.embedding_api_key or self.settings.llm_api_key
        if not api_key:
            raise VectorStorageError(
                message="未配置向量化模型密钥（AGRI_EMBEDDING_API_KEY）",
                code="embedding_not_configured",
                status_code=503,
            )
        params: dict[str, Any] = {
            "model": self.settings.embedding_model,
            "api_key": api_key,
        }
        base_url = self.settings.embedding_base_url or self.settings.llm_base_url
        if base_url:
            params["base_url"] = base_url
        self._embedding_model = OpenAIEmbeddings(**params)
        return self._embedding_model

    def split_text(self, text: str) -> list[str]:
        """按空行切分文本，单片段不超过 chunk_size。"""
        if self._text_splitter is None:
            splitter = SentenceSplitter(
                chunk_size=self.settings.knowledge_chunk_size,
                chunk_overlap=self.settings.knowledge_chunk_overlap,
                paragraph_separator="\n\n",
            )
            self._text_splitter = splitter.split_text
        return [c for c in self._text_splitter(text) if c and c.strip()]

    def add_documents(
        self,
        texts: list[str],
        *,
        collection_id: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> list[str]:
        """写入文档，每个文本对应一个向量库文档 ID。"""
        doc_ids: list[str] = []
        ids: list[str] = []
        chunks: list[str] = []
        metadatas: list[dict[str, Any]] = []

        # Chroma 元数据仅支持标量值
        base_meta = {
            k: v
            for k, v in (metadata or {}).items()
            if isinstance(v, (str, int, float, bool))
        }
        if collection_id:
            base_meta["collection_id"] = collection_id

        for text in texts:
            doc_id = uuid.uuid4().hex
            doc_ids.append(doc_id)
            for idx, chunk in enumerate(self.split_text(text)):
                ids.append(f"{doc_id}:{idx}")
                chunks.append(chunk)
                metadatas.append({**base_meta, "doc_id": doc_id, "chunk_index": idx})

        if not chunks:
            raise VectorStorageError(
                message="文档内容为空，无法写入知识库",
                code="empty_document",
                status_code=400,
            )

        try:
            collection = self._get_collection()
            embed_model = self._get_embed_model()
            for start in range(0, len(chunks), self.BATCH_SIZE):
                end = start + self.BATCH_SIZE
                embeddings = embed_model.embed_documents(chunks[start:end])
                collection.add(
                    ids=ids[start:end],
                    documents=chunks[start:end],
                    embeddings=[list(e) for e in embeddings],
                    metadatas=metadatas[start:end],
                )
        except AppError:
            raise
        except Exception as exc:
            log.exception(
                "vector_storage.add_failed",
                extra=log_extra(collection=self.collection_name, chunks=len(chunks)),
            )
            raise VectorStorageError(message=f"写入向量库失败: {exc}") from exc

        log.info(
            "vector_storage.added",
            extra=log_extra(
                collection=self.collection_name,
                documents=len(doc_ids),
                chunks=len(chunks),
            ),
        )
        return doc_ids

    def delete_document(self, doc_id: str) -> None:
        """删除文档的全部切片。"""
        try:
            self._get_collection().delete(where={"doc_id": doc_id})
        except Exception as exc:
            raise VectorStorageError(message=f"删除向量文档失败: {exc}") from exc

    def search(
        self,
        query: str,
        scope_ids: list[str] | None = None,
        top_k: int = 5,
        min_score: float = 0.5,
    ) -> dict[str, Any]:
        """语义检索。

        Returns:
            `{"code": 0, "msg": "ok", "chunks": [{"content", "score", "doc_id"}]}`，
            按得分降序；失败时 code 非 0，chunks 为空。
        """
        try:
            collection = self._get_collection()
            if collection.count() == 0:
                return {"code": SEARCH_OK, "msg": "ok", "chunks": []}

            embedding = list(self._get_embed_model().embed_query(query))
            kwargs: dict[str, Any] = {
                "query_embeddings": [embedding],
                "n_results": top_k,
                "include": ["documents", "metadatas", "distances"],
            }
            if scope_ids:
                kwargs["where"] = {"collection_id": {"$in": list(scope_ids)}}
            result = collection.query(**kwargs)
        except Exception as exc:
            log.warning(
                "vector_storage.search_failed",
                extra=log_extra(error=str(exc), error_type=exc.__class__.__name__),
            )
            return {"code": SEARCH_FAILED, "msg": str(exc), "chunks": []}

        documents = (result.get("documents") or [[]])[0] or []
        metadatas = (result.get("metadatas") or [[]])[0] or []
        distances = (result.get("distances") or [[]])[0] or []

        chunks: list[dict[str, Any]] = []
        for content, meta, distance in zip(documents, metadatas, distances):
            score = 1.0 - float(distance)
            if score < min_score:
                continue
            chunks.append(
                {
                    "content": content or "",
                    "score": round(score, 4),
                    "doc_id": str((meta or {}).get("doc_id") or ""),
                }
            )
        chunks.sort(key=lambda c: c["score"], reverse=True)
        return {"code": SEARCH_OK, "msg": "ok", "chunks": chunks}
