# src/core/exceptions.py
"""거리 행렬 / 포인트 컬렉션 오류 정의"""


class DistanceMatrixError(Exception):
    """거리 계산 관련 오류의 기본 클래스"""


class OutOfRange(DistanceMatrixError, IndexError):
    """행렬 범위를 벗어난 위치 인덱스"""

    def __init__(self, position: int, size: int):
        self.position = position
        self.size = size
        super().__init__(f"위치 {position}이(가) 행렬 범위 [0, {size})를 벗어났습니다")

    def __str__(self):
        return self.args[0]


class UnknownIdentifier(DistanceMatrixError, KeyError):
    """컬렉션에 없는 포인트 ID"""

    def __init__(self, point_id: str):
        self.point_id = point_id
        super().__init__(f"포인트 ID '{point_id}'이(가) 컬렉션에 없습니다")

    def __str__(self):
        return self.args[0]


class DuplicateIdentifier(DistanceMatrixError, ValueError):
    """이미 등록된 포인트 ID"""

    def __init__(self, point_id: str):
        self.point_id = point_id
        super().__init__(f"포인트 ID '{point_id}'이(가) 이미 존재합니다")


class InvalidCoordinate(DistanceMatrixError, ValueError):
    """위도/경도 범위 오류"""


class MatrixNotBuilt(DistanceMatrixError, RuntimeError):
    """행이 채워지지 않은 행렬 조회"""
