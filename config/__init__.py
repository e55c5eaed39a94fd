"""
거리 행렬 시스템 설정 패키지

중앙화된 설정 관리를 위한 패키지입니다.
"""

from .distance_config import (
    DistanceConfig,
    distance_config,
    get_config,
    set_config,
    reset_config,
    apply_preset,
    list_presets,
)

__all__ = [
    'DistanceConfig', 'distance_config', 'get_config', 'set_config',
    'reset_config', 'apply_preset', 'list_presets',
]
