from dataclasses import dataclass
import math

from src.core.exceptions import InvalidCoordinate


@dataclass(frozen=True)
class Point:
    """위치 정보를 담는 클래스"""
    id: str
    latitude: float
    longitude: float
    position: int = 0  # 컬렉션 내 삽입 순서 (0부터)

    def __post_init__(self):
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise InvalidCoordinate(f"{self.id}: 좌표가 유한한 값이 아닙니다 ({self.latitude}, {self.longitude})")
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidCoordinate(f"{self.id}: 위도는 -90~90 사이여야 합니다 ({self.latitude})")
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidCoordinate(f"{self.id}: 경도는 -180~180 사이여야 합니다 ({self.longitude})")

    @classmethod
    def from_dict(cls, data: dict) -> 'Point':
        """딕셔너리에서 Point 객체 생성"""
        point_id = data.get('id')
        # CSV 빈 칸(NaN), JSON null 등은 ID로 쓰지 않음
        if not isinstance(point_id, str) or not point_id:
            raise ValueError(f"포인트 ID는 비어 있지 않은 문자열이어야 합니다: {point_id!r}")

        return cls(
            id=point_id,
            latitude=float(data['latitude']),
            longitude=float(data['longitude']),
            position=int(data.get('position', 0))
        )

    def to_dict(self) -> dict:
        """Point 객체를 딕셔너리로 변환"""
        return {
            'id': self.id,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'position': self.position
        }

    @property
    def coordinates(self):
        return (self.latitude, self.longitude)
