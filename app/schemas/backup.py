from typing import Any, Optional

from pydantic import BaseModel


class BackupValidateRequest(BaseModel):
    backup: Any


class RestoreRequest(BaseModel):
    backup: dict[str, Any]
    clear_existing: bool = False
    # 미지정 시 백업 문서에 있는 모든 테이블
    tables: Optional[list[str]] = None
