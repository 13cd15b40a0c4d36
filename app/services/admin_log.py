"""
services/admin_log.py

감사(Audit) 기록 서비스.

- write_admin_log      : 관리자 행위를 AdminActionLog 에 추가
- write_connexion_log  : 로그인 시도(success / failed / pending)를 ConnexionLog 에 추가
- client_meta          : 요청에서 IP / User-Agent 추출

NOTE:
- db.commit() 은 호출 측(라우터)에서 수행
- 로그 행은 수정 / 삭제하지 않는다

"""

import logging

from fastapi import Request
from sqlalchemy.orm import Session

from app.models.admin_log import AdminAction, AdminActionLog, ConnexionLog

logger = logging.getLogger(__name__)


def client_meta(request: Request | None) -> dict:
    if request is None:
        return {"ip": None, "user_agent": None}
    ua = request.headers.get("user-agent")
    return {
        "ip": request.client.host if request.client else None,
        "user_agent": ua[:255] if ua else None,
    }


def write_admin_log(
    db: Session,
    *,
    actor_id,
    action: AdminAction,
    target_user_id=None,
    before_role=None,
    after_role=None,
    details: str | None = None,
    ip=None,
    user_agent=None,
):
    db.add(
        AdminActionLog(
            actor_id=actor_id,
            action=action,
            target_user_id=target_user_id,
            before_role=before_role,
            after_role=after_role,
            details=details[:500] if details else None,
            ip=ip,
            user_agent=user_agent,
        )
    )
    logger.info("admin action %s by %s (target=%s)", action.value, actor_id, target_user_id)


def write_connexion_log(db: Session, *, email: str, statut: str, user_id=None, ip=None, user_agent=None):
    db.add(ConnexionLog(user_id=user_id, email=email, statut=statut, ip=ip, user_agent=user_agent))
    if statut == "failed":
        logger.warning("failed login for %s from %s", email, ip)
