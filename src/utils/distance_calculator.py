from math import radians, sin, cos, sqrt, asin
from geopy.distance import great_circle

EARTH_RADIUS_M = 6378100  # 지구의 반경 (m), 구면 근사


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    두 지점 간의 Haversine 거리를 계산합니다.

    Args:
        lat1: 첫 번째 지점의 위도
        lon1: 첫 번째 지점의 경도
        lat2: 두 번째 지점의 위도
        lon2: 두 번째 지점의 경도

    Returns:
        float: 두 지점 간의 거리 (m)
    """
    lat1, lon1 = radians(lat1), radians(lon1)
    lat2, lon2 = radians(lat2), radians(lon2)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = sin(dlat/2)**2 + cos(lat1) * cos(lat2) * sin(dlon/2)**2
    # 대척점 부근 부동소수 오차로 1을 넘지 않도록
    distance = 2 * EARTH_RADIUS_M * asin(min(1.0, sqrt(h)))

    return distance


def calculate_distance_int(lat1: float, lon1: float, lat2: float, lon2: float) -> int:
    """행렬 저장용 거리 (m, 소수점 이하 버림)"""
    return int(calculate_distance(lat1, lon1, lat2, lon2))


def calculate_distance_great_circle(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    geopy great_circle을 사용한 거리 계산 (같은 구 반경, 검증용)

    Args:
        lat1, lon1: 첫 번째 지점의 좌표
        lat2, lon2: 두 번째 지점의 좌표

    Returns:
        float: 거리 (m)
    """
    return great_circle((lat1, lon1), (lat2, lon2), radius=EARTH_RADIUS_M / 1000).meters
