#!/usr/bin/env python3
"""
거리 행렬 시스템 설정 파일

모든 변경 가능한 변수들을 중앙에서 관리합니다.
이 파일을 수정하면 코드 변경 없이 시스템 동작을 조정할 수 있습니다.
"""

import copy
import logging
from typing import Dict, Any, List

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DistanceConfig:
    """거리 행렬 시스템 설정 클래스"""

    def __init__(self):
        self.config = self._load_default_config()

    def _load_default_config(self) -> Dict[str, Any]:
        """기본 설정 로드"""
        return {
            # 📍 포인트 컬렉션 설정
            "collection": {
                "reject_duplicates": True       # 중복 ID 거부 (False면 마지막 값으로 교체)
            },

            # 📐 거리 행렬 설정
            "matrix": {
                "log_rows": False               # 행렬 생성 후 행 단위 디버그 출력
            },

            # 📊 모니터링 설정
            "monitoring": {
                "enabled": True,                # 행렬 생성 메트릭 수집 여부
                "track_memory": False,          # tracemalloc 메모리 추적 여부
                "history_limit": 100            # 보관할 메트릭 최대 개수
            },

            # 🔧 시스템 설정
            "system": {
                "logging": {
                    "level": "INFO",            # 로그 레벨
                    "file_enabled": False,      # 파일 로그 사용 여부
                    "log_dir": "logs"           # 로그 디렉토리
                }
            }
        }

    def get(self, key_path: str, default=None):
        """점 표기법으로 설정값 가져오기 (예: 'matrix.log_rows')"""
        keys = key_path.split('.')
        value = self.config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key_path: str, value):
        """점 표기법으로 설정값 변경하기"""
        keys = key_path.split('.')
        config = self.config

        for key in keys[:-1]:
            if key not in config:
                config[key] = {}
            config = config[key]

        config[keys[-1]] = value

    def reset(self):
        """기본 설정으로 되돌리기"""
        self.config = self._load_default_config()

    def update_from_args(self, args):
        """명령행 인수로부터 설정 업데이트"""
        if hasattr(args, 'log_level') and args.log_level:
            self.set('system.logging.level', args.log_level.upper())

        if hasattr(args, 'allow_overwrite') and args.allow_overwrite:
            self.set('collection.reject_duplicates', False)

        if hasattr(args, 'track_memory') and args.track_memory:
            self.set('monitoring.track_memory', True)

    def validate(self) -> List[str]:
        """설정값 검증"""
        errors = []

        level = self.get('system.logging.level')
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            errors.append(f"로그 레벨은 {', '.join(LOG_LEVELS)} 중 하나여야 합니다.")

        limit = self.get('monitoring.history_limit')
        if not isinstance(limit, int) or limit <= 0:
            errors.append("메트릭 보관 개수는 1 이상이어야 합니다.")

        if self.get('system.logging.file_enabled') and not self.get('system.logging.log_dir'):
            errors.append("파일 로그를 사용하려면 로그 디렉토리가 필요합니다.")

        for key_path in ('collection.reject_duplicates', 'matrix.log_rows',
                         'monitoring.enabled', 'monitoring.track_memory'):
            if not isinstance(self.get(key_path), bool):
                errors.append(f"{key_path} 값은 True/False 여야 합니다.")

        return errors


# 전역 설정 인스턴스
distance_config = DistanceConfig()


# 편의 함수들
def get_config(key_path: str, default=None):
    """설정값 가져오기"""
    return distance_config.get(key_path, default)


def set_config(key_path: str, value):
    """설정값 변경하기"""
    distance_config.set(key_path, value)


def reset_config():
    """설정 초기화"""
    distance_config.reset()


def validate_config():
    """설정 검증"""
    return distance_config.validate()


# 프리셋 설정들
PRESETS = {
    "debug": {
        "description": "디버그 (행 출력, 메모리 추적)",
        "overrides": {
            "system.logging.level": "DEBUG",
            "matrix.log_rows": True,
            "monitoring.track_memory": True
        }
    },
    "quiet": {
        "description": "조용한 실행 (경고 이상만 출력, 모니터링 끔)",
        "overrides": {
            "system.logging.level": "WARNING",
            "monitoring.enabled": False
        }
    },
    "overwrite": {
        "description": "중복 ID는 마지막 값으로 교체",
        "overrides": {
            "collection.reject_duplicates": False
        }
    },
    "test": {
        "description": "테스트 모드",
        "overrides": {
            "system.logging.file_enabled": False,
            "monitoring.history_limit": 10
        }
    }
}


def apply_preset(preset_name: str):
    """프리셋 적용"""
    if preset_name not in PRESETS:
        raise ValueError(f"알 수 없는 프리셋: {preset_name}")

    preset = PRESETS[preset_name]
    logger.info(f"프리셋 적용: {preset_name} - {preset['description']}")

    for key_path, value in preset['overrides'].items():
        distance_config.set(key_path, copy.deepcopy(value))


def list_presets():
    """사용 가능한 프리셋 목록"""
    print("📋 사용 가능한 프리셋:")
    for name, preset in PRESETS.items():
        print(f"   {name}: {preset['description']}")
