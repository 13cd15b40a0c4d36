"""
main.py

E2D Connect 백엔드 진입점.

- 로깅 설정 (app 로거)
- FastAPI 앱 생성 / CORS 미들웨어
- 도메인별 라우터 등록
- 헬스 체크, DB 연결 확인 엔드포인트

비즈니스 로직은 routers / services 계층에 둔다.
"""

import logging

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session
from sqlalchemy import text

from app.core.config import settings
from app.core.deps import get_db
from app.core.logging import setup_logging
from app.routers import (
    admin,
    aides,
    analytics,
    auth,
    backup,
    caisse,
    cotisations,
    epargnes,
    exercices,
    membres,
    permissions,
    prets,
    reunions,
    sanctions,
    sport,
    users,
    vitrine,
)

setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
logger = logging.getLogger("app")

app = FastAPI(title=settings.APP_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(admin.router)
app.include_router(permissions.router)
app.include_router(backup.router)

app.include_router(membres.router)
app.include_router(exercices.router)
app.include_router(cotisations.router)
app.include_router(epargnes.router)
app.include_router(prets.router)
app.include_router(sanctions.router)
app.include_router(reunions.router)
app.include_router(aides.router)
app.include_router(caisse.router)
app.include_router(sport.router)
app.include_router(analytics.router)
app.include_router(vitrine.router)

logger.info("%s started (%d routes)", settings.APP_NAME, len(app.routes))


@app.get("/health")
def health():
    return {"status": "ok"}


"""
DB 연결 확인

- SELECT 1 로 DB 응답 여부만 확인
- 프로세스는 살아 있으나 DB 가 죽은 상황을 분리해서 감지

"""
@app.get("/db-ping")
def db_ping(db: Session = Depends(get_db)):
    value = db.execute(text("SELECT 1")).scalar_one()
    return {"db": "ok", "value": value}
