#!/usr/bin/env python3
"""数据库初始化脚本。

创建所有数据表并补齐内置风格模板。适用于开发环境和首次部署，可重复执行。

使用方法：
    python scripts/init-db.py
"""

import sys
from pathlib import Path

# 允许从任意工作目录运行脚本：确保项目根目录在 sys.path 中
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from agriscript.application.repositories.style_template_repository import (
    StyleTemplateRepository,
)
from agriscript.application.services.style_template_service import StyleTemplateService
from agriscript.shared.config import get_settings
from agriscript.shared.db import Base, init_db, make_engine, make_session_factory


def seed_style_templates(engine) -> None:
    """播种内置风格模板（已存在的同名模板不覆盖）。"""
    session_factory = make_session_factory(engine)
    with session_factory() as session:
        service = StyleTemplateService(StyleTemplateRepository(session))
        inserted = service.init_builtin_templates()
        for template in inserted:
            print(f"Seeding style template: {template.name}")


def main() -> None:
    """初始化数据库并创建所有表。"""
    settings = get_settings()

    db_path = Path(settings.sqlite_path)
    engine = make_engine(db_path)
    init_db(engine)

    print(f"DB initialized: {db_path}")
    print("已创建的表:")
    for table in Base.metadata.tables.values():
        print(f"  - {table.name}")

    seed_style_templates(engine)


if __name__ == "__main__":
    main()
