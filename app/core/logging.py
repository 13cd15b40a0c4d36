"""
logging.py

애플리케이션 로거 초기화.

- "app" 네임스페이스 로거에 콘솔 핸들러(선택적으로 파일 핸들러)를 연결
- 각 모듈은 logging.getLogger(__name__) 으로 하위 로거를 사용
- app.main 시작 시 한 번 호출

"""

import logging
import sys


def setup_logging(level: str | int = logging.INFO, log_file: str | None = None) -> None:
    logger = logging.getLogger("app")
    logger.setLevel(level)

    # uvicorn --reload 등으로 재호출될 때 핸들러 중복 방지
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized (level=%s)", logging.getLevelName(logger.level))
