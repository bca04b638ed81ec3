"""
오류 처리 및 로깅 유틸리티

콘솔 로그는 WARNING 이상만 색상으로 표시하고, 파일 핸들러가 지정되면 DEBUG 이상을 모두 기록합니다.
"""

import logging
import functools
import time
from pathlib import Path
from typing import Callable, Optional, Union

# ANSI 컬러 코드
COLORS = {
    'DEBUG': '\033[94m',  # 파란색
    'INFO': '\033[92m',   # 녹색
    'WARNING': '\033[93m', # 노란색
    'ERROR': '\033[91m',  # 빨간색
    'CRITICAL': '\033[41m\033[97m', # 배경 빨간색, 글자 흰색
    'RESET': '\033[0m'    # 리셋
}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """컬러 로그 포매터"""

    def format(self, record):
        levelname = record.levelname
        message = super().format(record)

        if levelname in COLORS:
            return f"{COLORS[levelname]}{message}{COLORS['RESET']}"
        return message


def get_logger(name: str) -> logging.Logger:
    """모듈별 로거 생성"""
    return logging.getLogger(name)


def setup_logger(
    name: str,
    log_file: Optional[Union[str, Path]] = None,
    console_level: int = logging.WARNING
) -> logging.Logger:
    """로거 설정

    Args:
        name: 로거 이름
        log_file: 모든 레벨을 기록할 로그 파일 경로 (None이면 파일 기록 안 함)
        console_level: 콘솔 핸들러 레벨

    Returns:
        설정된 로거
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # 같은 이름으로 다시 호출해도 핸들러가 중복되지 않도록 함
    if getattr(logger, '_lotto_pattern_configured', False):
        return logger

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            LOG_FORMAT + ' - [%(filename)s:%(lineno)d]',
            datefmt=DATE_FORMAT
        ))
        logger.addHandler(file_handler)

    logger._lotto_pattern_configured = True
    return logger


def log_performance(func: Callable) -> Callable:
    """
    성능 측정 데코레이터

    특징:
    1. 실행 시간 측정
    2. 실패 시 소요 시간과 오류를 기록한 뒤 예외를 다시 발생
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = logging.getLogger(func.__module__)
        logger.debug(f"Starting {func.__name__}")
        start_time = time.perf_counter()

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            execution_time = time.perf_counter() - start_time
            logger.error(
                f"함수 {func.__name__} 실행 실패: "
                f"시간={execution_time:.3f}초, "
                f"오류={str(e)}"
            )
            raise

        execution_time = time.perf_counter() - start_time
        logger.debug(f"Finished {func.__name__} in {execution_time:.4f} seconds")
        return result

    return wrapper
