"""
backup.py

관리자 전용 JSON 백업 / 검증 / 복원 API.

- 백업: 지정 테이블(기본 목록)의 모든 행을 JSON 문서로 내려받기
- 검증: 업로드한 문서의 구조 확인 (DB 변경 없음)
- 복원: SUPERADMIN 전용, 테이블 단위 savepoint, 결과를 관리자 로그에 기록

"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.deps import get_current_admin, get_current_superadmin, get_db
from app.models.admin_log import AdminAction
from app.models.user import User
from app.schemas.backup import BackupValidateRequest, RestoreRequest
from app.services.admin_log import client_meta, write_admin_log
from app.services.backup import DEFAULT_TABLES, create_backup, restore_backup, validate_backup

router = APIRouter(prefix="/admin/backup", tags=["admin-backup"])


@router.get("/tables")
def list_backup_tables(_: User = Depends(get_current_admin)):
    return {"tables": DEFAULT_TABLES}


"""
백업 다운로드 API

- tables 쿼리 반복 지정 가능 (?tables=membres&tables=prets)
- Content-Disposition: attachment 로 파일 저장 유도

"""
@router.get("")
def download_backup(
    tables: list[str] | None = Query(default=None),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    try:
        backup = create_backup(db, tables)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    headers = {"Content-Disposition": f'attachment; filename="e2d_backup_{stamp}.json"'}
    return JSONResponse(content=backup, headers=headers)


@router.post("/validate")
def post_validate(
    body: BackupValidateRequest,
    _: User = Depends(get_current_admin),
):
    return validate_backup(body.backup)


@router.post("/restore")
def post_restore(
    body: RestoreRequest,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_superadmin),
):
    try:
        result = restore_backup(db, body.backup, clear_existing=body.clear_existing, tables=body.tables)
        restored = ",".join(f"{k}={v}" for k, v in result["restored"].items())
        write_admin_log(
            db,
            actor_id=admin.id,
            action=AdminAction.RESTORE_BACKUP,
            details=f"clear={body.clear_existing} {restored}",
            **client_meta(request),
        )
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return {"data": result}
