"""로깅 설정

포맷: [시각] [레벨] [로거 이름] 메시지
"""

import logging

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# DEBUG가 아니면 조용히 둘 외부 로거
NOISY_LOGGERS = ("sqlalchemy.engine", "httpx")


def setup_logging(level: str = "INFO", quiet_libraries: bool = True) -> None:
    """루트 로거 설정. 알 수 없는 레벨 이름은 ValueError."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, datefmt=DATE_FORMAT)

    if quiet_libraries and numeric_level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
