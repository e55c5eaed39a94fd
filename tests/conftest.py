import sys
from pathlib import Path

import pytest

# 프로젝트 루트 디렉토리를 파이썬 경로에 추가
project_root = str(Path(__file__).parent.parent)
sys.path.insert(0, project_root)

from config.distance_config import get_config, reset_config
from src.core.logger import set_log_level
from src.monitoring.matrix_monitor import build_monitor


# pytest 설정
def pytest_configure(config):
    """pytest 설정 추가"""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture(autouse=True)
def clean_state():
    """테스트마다 설정과 모니터 기록 초기화"""
    reset_config()
    set_log_level(get_config("system.logging.level"))
    build_monitor.clear_metrics()
    yield
    reset_config()
    set_log_level(get_config("system.logging.level"))
    build_monitor.clear_metrics()
