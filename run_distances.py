#!/usr/bin/env python3
"""
포인트 간 거리 조회 실행 스크립트

핵심 기능:
1. JSON/CSV 파일에서 포인트 목록 로드
2. 두 포인트 간 거리, 최소/최대 거리, 기준 거리 미만 쌍 수 조회
3. 포인트 목록과 거리 행렬 출력

사용법:
    python run_distances.py --points FILE [옵션]

옵션:
    --distance A B      : A와 B 사이 거리 (m)
    --min-max           : 최소/최대 거리
    --count-below N     : N미터 미만인 쌍의 수
    --subset ID ...     : --min-max, --count-below를 주어진 ID들로 제한
    --show-points       : 포인트 목록 출력
    --show-matrix       : 전체 거리 행렬 출력
    --preset PRESET     : 프리셋 적용 (debug/quiet/overwrite/test)
    --log-level LEVEL   : 로그 레벨 지정
    --list-presets      : 프리셋 목록 출력
"""

import sys
import json
import argparse
import traceback
from pathlib import Path
from typing import List, Dict, Any, Optional

# 프로젝트 루트 경로를 sys.path에 추가
project_root = Path(__file__).parent
sys.path.append(str(project_root))

import pandas as pd

from config.distance_config import (
    distance_config, apply_preset, list_presets, PRESETS, LOG_LEVELS
)
from src.core.exceptions import DistanceMatrixError
from src.core.logger import set_log_level
from src.core.point_collection import PointCollection


def load_point_records(path: str) -> List[Dict[str, Any]]:
    """JSON({"points": [...]} 또는 리스트) / CSV 파일에서 포인트 레코드 로드"""
    file_path = Path(path)

    if file_path.suffix.lower() == '.csv':
        frame = pd.read_csv(file_path, dtype={'id': str})
        missing = {'id', 'latitude', 'longitude'} - set(frame.columns)
        if missing:
            raise ValueError(f"CSV 컬럼 누락: {', '.join(sorted(missing))}")
        return frame[['id', 'latitude', 'longitude']].to_dict(orient='records')

    with open(file_path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get('points', [])
    if not isinstance(data, list):
        raise ValueError(f"포인트 목록 형식이 올바르지 않습니다: {path}")
    return data


def parse_arguments(argv: Optional[List[str]] = None):
    """명령행 인수 파싱"""
    parser = argparse.ArgumentParser(
        description="포인트 간 거리 행렬 조회",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
사용 예시:
    python run_distances.py --points points.json --min-max
    python run_distances.py --points points.csv --distance NYC LA
    python run_distances.py --points points.json --count-below 5000 --subset A B C
    python run_distances.py --points points.json --show-matrix --preset debug
        """
    )

    parser.add_argument('--points', help='포인트 파일 (JSON 또는 CSV)')
    parser.add_argument('--collection-id', default='', help='컬렉션 ID')

    # 조회 옵션
    parser.add_argument('--distance', nargs=2, metavar=('A', 'B'), help='두 포인트 간 거리')
    parser.add_argument('--min-max', action='store_true', help='최소/최대 거리')
    parser.add_argument('--count-below', type=int, metavar='N', help='N미터 미만인 쌍의 수')
    parser.add_argument('--subset', nargs='+', metavar='ID', help='조회 대상 ID 제한')

    # 출력 옵션
    parser.add_argument('--show-points', action='store_true', help='포인트 목록 출력')
    parser.add_argument('--show-matrix', action='store_true', help='거리 행렬 출력')

    # 🔧 Config 관련 옵션들
    parser.add_argument('--preset', choices=sorted(PRESETS), help='프리셋 적용')
    parser.add_argument('--list-presets', action='store_true', help='프리셋 목록 출력')
    parser.add_argument('--log-level', type=str.upper, choices=LOG_LEVELS, help='로그 레벨')
    parser.add_argument('--allow-overwrite', action='store_true', help='중복 ID는 마지막 값으로 교체')
    parser.add_argument('--track-memory', action='store_true', help='행렬 생성 메모리 추적')

    args = parser.parse_args(argv)
    if not args.list_presets and not args.points:
        parser.error('--points 는 필수입니다')
    return args


def run_queries(collection: PointCollection, args) -> None:
    """요청된 조회 실행 및 결과 출력"""
    if args.show_points:
        print(collection.to_dataframe().to_string(index=False))

    if args.distance:
        a, b = args.distance
        print(f"📏 {a} → {b}: {collection.distance(a, b)}m")

    if args.min_max:
        if args.subset:
            min_dist, max_dist = collection.min_max_subset(args.subset)
        else:
            min_dist, max_dist = collection.min_max()
        print(f"📉 최소 거리: {min_dist}m")
        print(f"📈 최대 거리: {max_dist}m")

    if args.count_below is not None:
        if args.subset:
            count = collection.count_below_subset(args.subset, args.count_below)
        else:
            count = collection.count_below(args.count_below)
        print(f"🔢 {args.count_below}m 미만 쌍: {count}개")

    if args.show_matrix:
        ids = [point.id for point in collection]
        frame = pd.DataFrame(collection.build_matrix().to_array(), index=ids, columns=ids)
        print(frame.to_string())


def main(argv: Optional[List[str]] = None) -> int:
    """메인 실행 함수"""
    args = parse_arguments(argv)

    if args.list_presets:
        list_presets()
        return 0

    if args.preset:
        apply_preset(args.preset)
    distance_config.update_from_args(args)

    errors = distance_config.validate()
    if errors:
        for error in errors:
            print(f"❌ {error}")
        return 2
    set_log_level(distance_config.get('system.logging.level'))

    try:
        records = load_point_records(args.points)
        collection = PointCollection.from_records(args.collection_id, records)
        print(f"📍 포인트 {len(collection)}개 로드: {args.points}")

        run_queries(collection, args)
        return 0

    except (DistanceMatrixError, KeyError, ValueError, OSError) as e:
        print(f"❌ 오류: {e}")
        return 1
    except KeyboardInterrupt:
        print("\n\n⚠️ 사용자에 의해 중단되었습니다.")
        return 1
    except Exception as e:
        print(f"\n❌ 예상치 못한 오류 발생: {str(e)}")
        print(f"🔍 상세 오류: {traceback.format_exc()}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
