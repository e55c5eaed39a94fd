# src/core/logger.py
import logging
from datetime import datetime
import os
from typing import Set, Union

from config.distance_config import get_config

_configured_loggers: Set[str] = set()


def _resolve_level(level: Union[str, int, None]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level or 'INFO').upper(), logging.INFO)


def setup_logger(name: str) -> logging.Logger:
    """모듈별 로거 설정"""
    logger = logging.getLogger(name)

    # 이미 핸들러가 설정되어 있다면 스킵
    if logger.handlers:
        return logger

    level = _resolve_level(get_config('system.logging.level', 'INFO'))
    logger.setLevel(level)

    # 포맷터
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    # 콘솔 핸들러
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # 파일 핸들러 (설정에서 켠 경우만)
    if get_config('system.logging.file_enabled', False):
        log_dir = get_config('system.logging.log_dir', 'logs')
        os.makedirs(log_dir, exist_ok=True)

        log_file = f"{log_dir}/{name}_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _configured_loggers.add(name)
    return logger


def set_log_level(level: Union[str, int]) -> None:
    """setup_logger로 만든 모든 로거의 레벨 변경"""
    resolved = _resolve_level(level)
    for name in _configured_loggers:
        logger = logging.getLogger(name)
        logger.setLevel(resolved)
        for handler in logger.handlers:
            handler.setLevel(resolved)
