import logging
import random
import pytest
import numpy as np
import pandas as pd
from config.distance_config import set_config, apply_preset
from src.core.point_collection import PointCollection, new_collection
from src.core.exceptions import (
    DuplicateIdentifier,
    InvalidCoordinate,
    UnknownIdentifier,
)
from src.model.point import Point
from tests.test_data.generate_test_data import city_points, generate_suwon_points


def create_equator_collection() -> PointCollection:
    """적도 위 (0,0), (0,1), (0,2) 세 지점"""
    collection = new_collection("equator")
    collection.add("A", 0.0, 0.0)
    collection.add("B", 0.0, 1.0)
    collection.add("C", 0.0, 2.0)
    return collection


def create_random_collection(size: int, seed: int = 42) -> PointCollection:
    return PointCollection.from_records("random", generate_suwon_points(size, seed=seed)["points"])


def test_add_assigns_dense_positions():
    collection = create_equator_collection()

    assert len(collection) == 3
    assert [p.position for p in collection] == [0, 1, 2]
    assert [p.id for p in collection] == ["A", "B", "C"]
    assert "B" in collection
    assert "Z" not in collection
    assert collection.get("C") == Point("C", 0.0, 2.0, 2)


def test_add_returns_point():
    collection = new_collection("c1")
    point = collection.add("P", 37.5, 127.0)

    assert point.id == "P"
    assert point.position == 0
    assert point.coordinates == (37.5, 127.0)


def test_duplicate_identifier_rejected():
    collection = create_equator_collection()
    collection.min_max()

    with pytest.raises(DuplicateIdentifier):
        collection.add("B", 10.0, 10.0)

    # 실패한 추가는 상태를 바꾸지 않음
    assert len(collection) == 3
    assert collection.get("B").longitude == 1.0
    assert collection.matrix is not None


def test_duplicate_identifier_overwrite_keeps_position():
    """덮어쓰기 모드에서는 기존 position 유지"""
    apply_preset("overwrite")
    collection = create_equator_collection()
    before = collection.distance("A", "B")

    point = collection.add("B", 0.0, 3.0)

    assert point.position == 1
    assert len(collection) == 3
    assert [p.position for p in collection] == [0, 1, 2]
    assert collection.matrix is None
    assert collection.distance("A", "B") > before
    assert collection.distance("A", "B") == collection.distance("B", "A")


def test_invalid_points_rejected():
    collection = new_collection("c1")

    with pytest.raises(ValueError):
        collection.add("", 0.0, 0.0)
    with pytest.raises(InvalidCoordinate):
        collection.add("X", 91.0, 0.0)
    with pytest.raises(InvalidCoordinate):
        collection.add("X", 0.0, -180.5)
    with pytest.raises(InvalidCoordinate):
        collection.add("X", float("nan"), 0.0)

    assert len(collection) == 0


@pytest.mark.parametrize("record", [
    {"id": None, "latitude": 0.0, "longitude": 0.0},
    {"id": float("nan"), "latitude": 0.0, "longitude": 0.0},
    {"id": 7, "latitude": 0.0, "longitude": 0.0},
    {"latitude": 0.0, "longitude": 0.0},
])
def test_record_without_string_id_rejected(record):
    """null / NaN / 누락된 ID는 'None', 'nan' 문자열로 바꾸지 않음"""
    with pytest.raises(ValueError):
        Point.from_dict(record)
    with pytest.raises(ValueError):
        PointCollection.from_records("records", [record])


def test_distance_symmetry_and_self_distance():
    collection = PointCollection.from_records("cities", city_points())
    ids = [p.id for p in collection]

    for a in ids:
        assert collection.distance(a, a) == 0
        for b in ids:
            assert collection.distance(a, b) == collection.distance(b, a)


def test_distance_new_york_to_los_angeles():
    collection = new_collection("us")
    collection.add("A", 40.7128, -74.0060)
    collection.add("B", 34.0522, -118.2437)

    dist = collection.distance("A", "B")

    assert isinstance(dist, int)
    assert abs(dist - 3_936_000) <= 5_000
    assert collection.distance_exact("A", "B") == pytest.approx(dist, abs=1.0)
    assert collection.distance_exact("A", "B") >= dist


def test_empty_identifier_short_circuit():
    collection = create_equator_collection()

    assert collection.distance("", "B") == 0
    assert collection.distance("A", "") == 0
    assert collection.distance("", "not-there") == 0
    assert collection.distance_exact("", "B") == 0.0
    # 빈 ID 조회는 행렬을 만들지 않음
    assert collection.matrix is None


def test_unknown_identifier():
    collection = create_equator_collection()

    with pytest.raises(UnknownIdentifier) as exc_info:
        collection.distance("A", "Z")
    assert exc_info.value.point_id == "Z"
    assert isinstance(exc_info.value, KeyError)

    with pytest.raises(UnknownIdentifier):
        collection.distance_exact("Z", "A")
    with pytest.raises(UnknownIdentifier):
        collection.get("Z")


def test_min_max_three_points_on_equator():
    collection = create_equator_collection()

    min_dist, max_dist = collection.min_max()

    assert (min_dist, max_dist) == (111318, 222637)
    assert max_dist == collection.distance("A", "C")
    assert min_dist == collection.distance("A", "B")
    assert min_dist == collection.distance("B", "C")


def test_min_max_small_collections():
    collection = new_collection("tiny")
    assert collection.min_max() == (-1, 0)
    assert collection.count_below(10 ** 9) == 0

    collection.add("only", 37.0, 127.0)
    assert collection.min_max() == (-1, 0)
    assert collection.count_below(10 ** 9) == 0


def test_coincident_points_excluded():
    """같은 좌표의 서로 다른 포인트는 거리 0으로 집계에서 제외"""
    collection = new_collection("dup-coords")
    collection.add("A", 0.0, 0.0)
    collection.add("B", 0.0, 0.0)
    collection.add("C", 0.0, 1.0)

    assert collection.distance("A", "B") == 0
    assert collection.min_max() == (111318, 111318)
    assert collection.count_below(10 ** 9) == 2


def test_count_below():
    collection = create_equator_collection()

    assert collection.count_below(111318) == 0
    assert collection.count_below(111319) == 2
    assert collection.count_below(222637) == 2
    assert collection.count_below(222638) == 3


def test_count_below_is_monotonic():
    collection = create_random_collection(25)
    cutoffs = [0, 500, 1000, 2000, 4000, 8000, 16000]

    counts = [collection.count_below(cutoff) for cutoff in cutoffs]

    assert counts == sorted(counts), "cutoff가 커지면 개수가 줄어들면 안 됨"
    assert counts[-1] <= 25 * 24 // 2


def test_subset_queries():
    collection = create_equator_collection()

    assert collection.min_max_subset(["A", "C"]) == (222637, 222637)
    assert collection.min_max_subset(["C", "B"]) == (111318, 111318)
    assert collection.count_below_subset(["A", "B", "C"], 200000) == 2
    assert collection.count_below_subset(["A", "C"], 200000) == 0


def test_subset_unknown_ids_are_dropped(caplog):
    collection = create_equator_collection()

    with caplog.at_level(logging.WARNING, logger="point_collection"):
        with_unknown = collection.min_max_subset(["A", "ghost", "C"])
    assert with_unknown == collection.min_max_subset(["A", "C"])
    assert "ghost" in caplog.text

    assert collection.count_below_subset(["ghost", "A", "B"], 10 ** 9) == \
        collection.count_below_subset(["A", "B"], 10 ** 9)
    assert collection.min_max_subset(["ghost"]) == (-1, 0)
    assert collection.count_below_subset([], 10 ** 9) == 0


def test_subset_duplicate_ids():
    """같은 ID가 두 번 오면 위치도 두 번 들어감"""
    collection = create_equator_collection()

    assert collection.count_below_subset(["A", "A", "B"], 10 ** 9) == 2
    assert collection.min_max_subset(["A", "A"]) == (-1, 0)


def test_matrix_is_cached_until_mutation():
    collection = create_equator_collection()
    assert collection.matrix is None

    collection.min_max()
    matrix = collection.matrix
    assert matrix is not None

    collection.count_below(10)
    collection.distance("A", "B")
    assert collection.matrix is matrix

    collection.add("D", 0.0, 3.0)
    assert collection.matrix is None


def test_add_after_query_reflects_new_point():
    collection = create_equator_collection()
    assert collection.min_max() == (111318, 222637)
    assert collection.count_below(10 ** 9) == 3

    collection.add("D", 0.0, 3.0)

    assert collection.count_below(10 ** 9) == 6
    min_dist, max_dist = collection.min_max()
    assert min_dist == 111318
    assert max_dist == collection.distance("A", "D")
    assert len(collection.matrix) == 4


def test_rebuild_yields_identical_values():
    collection = create_random_collection(15)
    first = collection.build_matrix().to_array()

    collection.invalidate()
    assert collection.matrix is None
    second = collection.build_matrix().to_array()

    assert first is not second
    assert np.array_equal(first, second)


def test_matrix_matches_pairwise_distances():
    collection = PointCollection.from_records("cities", city_points())
    full = collection.build_matrix().to_array()
    points = list(collection)

    for a in points:
        for b in points:
            assert full[a.position, b.position] == collection.distance(a.id, b.id)


def test_to_dataframe():
    collection = create_equator_collection()
    frame = collection.to_dataframe()

    assert isinstance(frame, pd.DataFrame)
    assert list(frame.columns) == ["id", "latitude", "longitude", "position"]
    assert frame["id"].tolist() == ["A", "B", "C"]
    assert frame["position"].tolist() == [0, 1, 2]


def test_log_rows_after_build(caplog):
    set_config("matrix.log_rows", True)
    collection = create_equator_collection()

    with caplog.at_level(logging.DEBUG, logger="point_collection"):
        collection.build_matrix()

    assert "0: [0, 111318, 222637]" in caplog.text


def test_log_points(caplog):
    collection = create_equator_collection()

    with caplog.at_level(logging.INFO, logger="point_collection"):
        collection.log_points()

    assert "3 points" in caplog.text
    assert "< 2 > C" in caplog.text


@pytest.mark.slow
def test_large_collection():
    collection = create_random_collection(300, seed=7)
    ids = [p.id for p in collection]

    min_dist, max_dist = collection.min_max()
    assert 0 < min_dist <= max_dist

    subset = random.Random(1).sample(ids, 40)
    sub_min, sub_max = collection.min_max_subset(subset)
    assert min_dist <= sub_min <= sub_max <= max_dist
    assert collection.count_below(max_dist + 1) <= 300 * 299 // 2


if __name__ == "__main__":
    pytest.main(["-v", __file__])
