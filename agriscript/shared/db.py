from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import DeclarativeBase, sessionmaker


class Base(DeclarativeBase):
    """SQLAlchemy 声明式基类。"""


def make_engine(sqlite_path: Path):
    sqlite_path.parent.mkdir(parents=True, exist_ok=True)
    # 流式生成在工作线程中落库，连接需允许跨线程使用
    return create_engine(
        f"sqlite+pysqlite:///{sqlite_path}",
        future=True,
        connect_args={"check_same_thread": False},
    )


def make_session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def init_db(engine) -> None:
    # 导入实体以注册到 Base.metadata
    import agriscript.domain.entities  # noqa: F401

    Base.metadata.create_all(engine)
    _apply_lightweight_sqlite_migrations(engine)


def _apply_lightweight_sqlite_migrations(engine) -> None:
    """为早期建表的 scripts 补齐五段式及合规相关列（只加列，仅 SQLite）。"""
    if engine.dialect.name != "sqlite":
        return

    inspector = inspect(engine)
    if "scripts" not in inspector.get_table_names():
        return

    cols = {c["name"] for c in inspector.get_columns("scripts")}
    added = {
        "warm_up": "JSON",
        "retention": "JSON",
        "lock_customer": "JSON",
        "push_order": "JSON",
        "atmosphere": "JSON",
        "compliance_notes": "JSON",
        "estimated_duration": "VARCHAR(50)",
        "algorithm_tips": "TEXT",
        "raw_content": "TEXT",
    }
    with engine.begin() as conn:
        for name, ddl in added.items():
            if name not in cols:
                conn.execute(text(f"ALTER TABLE scripts ADD COLUMN {name} {ddl}"))
