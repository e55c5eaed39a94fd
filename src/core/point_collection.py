# src/core/point_collection.py
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import pandas as pd

from config.distance_config import get_config
from src.core.distance_matrix import DistanceMatrix
from src.core.exceptions import DuplicateIdentifier, UnknownIdentifier
from src.core.logger import setup_logger
from src.model.point import Point
from src.monitoring.matrix_monitor import build_monitor
from src.utils.distance_calculator import calculate_distance, calculate_distance_int

logger = setup_logger('point_collection')


class PointCollection:
    """
    ID로 조회하는 포인트 컬렉션

    포인트는 추가된 순서대로 0부터 위치(position)를 부여받고, 거리 행렬은
    첫 조회 시점에 현재 포인트로 만들어 캐시합니다. 포인트가 추가되면 캐시는 버립니다.
    """

    def __init__(self, collection_id: str = ""):
        self.id = collection_id
        self._points: Dict[str, Point] = {}
        self._ordered: List[Point] = []  # position 순서
        self._matrix: Optional[DistanceMatrix] = None

    @classmethod
    def from_records(cls, collection_id: str, records: Iterable[dict]) -> 'PointCollection':
        """딕셔너리 목록(id, latitude, longitude)에서 컬렉션 생성"""
        collection = cls(collection_id)
        for record in records:
            point = Point.from_dict(record)
            collection.add(point.id, point.latitude, point.longitude)
        return collection

    def __len__(self) -> int:
        return len(self._ordered)

    def __contains__(self, point_id) -> bool:
        return point_id in self._points

    def __iter__(self) -> Iterator[Point]:
        return iter(self._ordered)

    @property
    def matrix(self) -> Optional[DistanceMatrix]:
        """캐시된 거리 행렬 (없으면 None)"""
        return self._matrix

    def add(self, point_id: str, latitude: float, longitude: float) -> Point:
        """포인트 추가 후 캐시된 행렬 무효화"""
        if not point_id:
            raise ValueError("포인트 ID는 비어 있을 수 없습니다")

        existing = self._points.get(point_id)
        if existing is not None:
            if get_config('collection.reject_duplicates', True):
                raise DuplicateIdentifier(point_id)
            # 기존 위치를 유지해야 position이 0..n-1로 유지됨
            point = Point(point_id, latitude, longitude, existing.position)
            self._ordered[existing.position] = point
            logger.warning(f"id: {point_id} 덮어쓰기 (position {existing.position})")
        else:
            point = Point(point_id, latitude, longitude, len(self._ordered))
            self._ordered.append(point)

        self._points[point_id] = point
        self.invalidate()
        return point

    def get(self, point_id: str) -> Point:
        try:
            return self._points[point_id]
        except KeyError:
            raise UnknownIdentifier(point_id) from None

    def invalidate(self) -> None:
        """캐시된 거리 행렬 제거"""
        self._matrix = None

    def distance(self, a: str, b: str) -> int:
        """두 포인트 간 거리 (m). 한쪽 ID가 비어 있으면 0"""
        if not a or not b:
            return 0

        matrix = self.build_matrix()
        ap = self._position(a)
        bp = self._position(b)
        dist = matrix.distance(ap, bp)
        logger.debug(f"{a} to {b} distance is {dist}")
        return dist

    def distance_exact(self, a: str, b: str) -> float:
        """행렬을 거치지 않는 소수점 거리 (m)"""
        if not a or not b:
            return 0.0

        pa = self.get(a)
        pb = self.get(b)
        if pa.position == pb.position:
            return 0.0
        return calculate_distance(pa.latitude, pa.longitude, pb.latitude, pb.longitude)

    def min_max(self) -> Tuple[int, int]:
        """전체 포인트 쌍의 (최소, 최대) 거리"""
        matrix = self.build_matrix()
        return matrix.min_max(range(len(self)))

    def min_max_subset(self, ids: Iterable[str]) -> Tuple[int, int]:
        """주어진 ID들에 대한 (최소, 최대) 거리. 없는 ID는 건너뜀"""
        matrix = self.build_matrix()
        return matrix.min_max(self._positions(ids))

    def count_below(self, cutoff: int) -> int:
        """cutoff 미만 거리 쌍의 수"""
        matrix = self.build_matrix()
        return matrix.count_below(range(len(self)), cutoff)

    def count_below_subset(self, ids: Iterable[str], cutoff: int) -> int:
        """주어진 ID들 중 cutoff 미만 거리 쌍의 수. 없는 ID는 건너뜀"""
        matrix = self.build_matrix()
        return matrix.count_below(self._positions(ids), cutoff)

    def build_matrix(self) -> DistanceMatrix:
        """캐시된 행렬이 없으면 현재 포인트로 생성"""
        if self._matrix is None:
            self._matrix = self._construct_matrix()
        return self._matrix

    @build_monitor.monitor("build_matrix")
    def _construct_matrix(self) -> DistanceMatrix:
        count = len(self._ordered)
        matrix = DistanceMatrix(count)

        for ix, origin in enumerate(self._ordered):
            row = [0] * (count - ix)
            for k, target in enumerate(self._ordered[ix + 1:], start=1):
                row[k] = calculate_distance_int(
                    origin.latitude, origin.longitude,
                    target.latitude, target.longitude
                )
            matrix.set_row(row, ix)

        if get_config('matrix.log_rows', False):
            matrix.log_rows(logger)
        return matrix

    def _position(self, point_id: str) -> int:
        point = self._points.get(point_id)
        if point is None:
            logger.error(f"id: {point_id} not in points")
            raise UnknownIdentifier(point_id)
        return point.position

    def _positions(self, ids: Iterable[str]) -> List[int]:
        positions = []
        for point_id in ids:
            point = self._points.get(point_id)
            if point is None:
                logger.warning(f"id: {point_id} not in points, skipped")
                continue
            positions.append(point.position)
        return positions

    def to_dataframe(self) -> pd.DataFrame:
        """포인트 목록을 position 순서의 DataFrame으로 변환"""
        return pd.DataFrame(
            [point.to_dict() for point in self._ordered],
            columns=['id', 'latitude', 'longitude', 'position']
        )

    def log_points(self) -> None:
        logger.info(f"Collection {self.id!r}: {len(self)} points")
        for point in self._ordered:
            logger.info(f"< {point.position} > {point.id}: Lat: {point.latitude:f}, Long: {point.longitude:f}")


def new_collection(collection_id: str) -> PointCollection:
    """빈 포인트 컬렉션 생성"""
    return PointCollection(collection_id)
