# src/core/distance_matrix.py
import logging
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from src.core.exceptions import MatrixNotBuilt, OutOfRange

UNSET_MIN = -1  # 거리 쌍이 없을 때의 최소값


class DistanceMatrix:
    """
    삼각 거리 행렬

    i번째 행은 n - i개의 값을 가지며, k번째 값은 위치 i에서 i + k까지의 거리(m)입니다.
    0번째 값은 항상 자기 자신까지의 거리 0입니다.
    모든 행을 채운 뒤에는 변경하지 않고, 포인트가 바뀌면 새 인스턴스를 만듭니다.
    """

    def __init__(self, count: int):
        if count < 0:
            raise ValueError(f"행렬 크기는 0 이상이어야 합니다: {count}")
        self.size = count
        self._rows: List[Optional[np.ndarray]] = [None] * count

    def __len__(self) -> int:
        return self.size

    @property
    def is_built(self) -> bool:
        """모든 행이 채워졌는지 여부"""
        return all(row is not None for row in self._rows)

    def set_row(self, values: Sequence[int], index: int) -> None:
        """위치 index의 거리 행 설정 (values[k] = index에서 index + k까지의 거리)"""
        if len(values) < 1:
            return
        if not 0 <= index < self.size:
            raise OutOfRange(index, self.size)
        if len(values) != self.size - index:
            raise ValueError(
                f"{index}번 행의 길이는 {self.size - index}이어야 합니다: {len(values)}"
            )
        if self._rows[index] is not None:
            raise ValueError(f"{index}번 행은 이미 설정되었습니다")

        self._rows[index] = np.asarray(values, dtype=np.int64)

    def distance(self, a: int, b: int) -> int:
        """두 위치 간 거리 조회"""
        if a == b:
            return 0

        for position in (a, b):
            if not 0 <= position < self.size:
                raise OutOfRange(position, self.size)

        lower, higher = (a, b) if a < b else (b, a)
        row = self._rows[lower]
        if row is None:
            raise MatrixNotBuilt(f"{lower}번 행이 아직 설정되지 않았습니다")
        return int(row[higher - lower])

    def _pair_distances(self, positions: Sequence[int]) -> Iterator[int]:
        """positions[i], positions[j] (i <= j) 쌍 중 0이 아닌 거리"""
        positions = list(positions)
        for ix, a in enumerate(positions):
            for b in positions[ix:]:
                dist = self.distance(a, b)
                if dist == 0:
                    continue
                yield dist

    def count_below(self, positions: Sequence[int], cutoff: int) -> int:
        """cutoff 미만인 거리 쌍의 수 (0 거리 제외)"""
        return sum(1 for dist in self._pair_distances(positions) if dist < cutoff)

    def min_max(self, positions: Sequence[int]) -> Tuple[int, int]:
        """거리 쌍의 (최소, 최대). 쌍이 없으면 (-1, 0)"""
        min_dist = UNSET_MIN
        max_dist = 0

        for dist in self._pair_distances(positions):
            if dist > max_dist:
                max_dist = dist
            if min_dist == UNSET_MIN or dist < min_dist:
                min_dist = dist

        return min_dist, max_dist

    def to_array(self) -> np.ndarray:
        """대칭 n x n 배열로 변환 (진단용)"""
        if not self.is_built:
            raise MatrixNotBuilt("모든 행이 설정되기 전에는 배열로 변환할 수 없습니다")

        full = np.zeros((self.size, self.size), dtype=np.int64)
        for ix, row in enumerate(self._rows):
            full[ix, ix:] = row
            full[ix:, ix] = row
        return full

    def log_rows(self, logger: logging.Logger) -> None:
        """행 단위 디버그 출력"""
        for ix, row in enumerate(self._rows):
            values = row.tolist() if row is not None else None
            logger.debug(f"{ix}: {values}")
