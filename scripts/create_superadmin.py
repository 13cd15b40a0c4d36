"""

SUPERADMIN 초기 계정 생성 스크립트.

- 서버 최초 세팅 시 한 번 실행
- .env 의 SUPERADMIN_* 환경 변수로 계정 생성
- SUPERADMIN 이 이미 있으면 아무것도 하지 않음

사용 방법
- (.venv) ~\backend~$ python -m scripts.create_superadmin

"""

import logging
import os
from dotenv import load_dotenv
load_dotenv()

from sqlalchemy import select
from app.core.config import settings
from app.core.logging import setup_logging
from app.core.security import get_password_hash
from app.db.session import SessionLocal
from app.models.user import User, Role

logger = logging.getLogger("app.scripts.create_superadmin")


def main():
    setup_logging(settings.LOG_LEVEL)

    db = SessionLocal()
    try:
        exists = db.scalar(select(User).where(User.role == Role.SUPERADMIN))
        if exists:
            logger.info("SUPERADMIN already exists (%s). Skip creation.", exists.email)
            return

        email = os.environ["SUPERADMIN_EMAIL"]
        password = os.environ["SUPERADMIN_PASSWORD"]
        name = os.environ.get("SUPERADMIN_NAME", "Super Admin")
        phone = os.environ.get("SUPERADMIN_PHONE")

        if db.scalar(select(User).where(User.email == email)):
            raise RuntimeError("Email already exists but is not SUPERADMIN")

        db.add(
            User(
                email=email,
                password_hash=get_password_hash(password),
                name=name,
                phone=phone,
                role=Role.SUPERADMIN,
            )
        )
        db.commit()

        logger.info("SUPERADMIN created: %s", email)

    finally:
        db.close()


if __name__ == "__main__":
    main()
