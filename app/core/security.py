"""
security.py

비밀번호 해싱과 JWT 발급/검증 유틸리티.

대시보드 계정(User)의 인증에만 사용되는 저수준 함수들로,
라우터나 DB 접근 코드는 포함하지 않는다.

주요 기능:
- bcrypt 비밀번호 해시 / 검증
- Access Token (Authorization: Bearer) 발급 / 검증
- Refresh Token (HttpOnly Cookie) 발급 / 검증, rtv(version) 포함

관련 파일:
- app.core.config        : 시크릿 키, 알고리즘, 만료 시간
- app.core.deps          : 요청마다 Access Token 검증
- app.routers.auth       : 로그인 / 재발급 / 로그아웃

"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Literal, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.config import settings


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


"""
토큰 생성 공통 함수

- sub  : 사용자 ID (문자열 UUID)
- type : access / refresh
- exp  : UTC 기준 만료 timestamp
- extra: refresh 토큰의 rtv 등

"""

def _create_token(*, subject: str, token_type: Literal["access", "refresh"],
                  expires_delta: timedelta, secret: str, extra: Optional[dict] = None) -> str:
    expire = datetime.now(timezone.utc) + expires_delta
    payload = {"sub": subject, "type": token_type, "exp": int(expire.timestamp())}
    if extra:
        payload.update(extra)
    return jwt.encode(payload, secret, algorithm=settings.ALGORITHM)


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    return _create_token(
        subject=subject,
        token_type="access",
        expires_delta=expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        secret=settings.SECRET_KEY,
    )


def create_refresh_token(subject: str, refresh_token_version: int, expires_delta: Optional[timedelta] = None) -> str:
    return _create_token(
        subject=subject,
        token_type="refresh",
        expires_delta=expires_delta or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        secret=settings.REFRESH_SECRET_KEY,
        extra={"rtv": refresh_token_version},
    )


"""
Access Token 검증

- type 이 access 가 아니면 거부 (refresh 토큰으로 API 호출 차단)
- 성공 시 사용자 UUID 반환, 실패 시 JWTError

"""

def decode_access_token(token: str) -> uuid.UUID:
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    if payload.get("type") != "access":
        raise JWTError("Not an access token")
    sub = payload.get("sub")
    if not sub:
        raise JWTError("Missing subject")
    try:
        return uuid.UUID(sub)
    except ValueError as e:
        raise JWTError("Invalid subject") from e


"""
Refresh Token 검증

- type 이 refresh 인지 확인
- (user_id 문자열, rtv) 반환
- rtv 가 DB 의 refresh_token_version 과 다르면 호출 측에서 거부

"""

def decode_refresh_token(token: str) -> tuple[str, int]:
    payload = jwt.decode(token, settings.REFRESH_SECRET_KEY, algorithms=[settings.ALGORITHM])
    if payload.get("type") != "refresh":
        raise JWTError("Not a refresh token")
    return payload["sub"], int(payload.get("rtv", -1))
