import logging
import json
import tracemalloc
import traceback
from datetime import datetime
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional
from functools import wraps

from config.distance_config import get_config

logger = logging.getLogger(__name__)


@dataclass
class BuildMetrics:
    """거리 행렬 생성 메트릭스를 저장하는 클래스"""
    stage_name: str
    collection_id: str
    start_time: datetime
    end_time: datetime
    num_points: int
    num_pairs: int
    execution_time: float
    memory_usage: float
    success: bool
    error_message: str = ""

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["start_time"] = self.start_time.isoformat()
        data["end_time"] = self.end_time.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> 'BuildMetrics':
        data = dict(data)
        data["start_time"] = datetime.fromisoformat(data["start_time"])
        data["end_time"] = datetime.fromisoformat(data["end_time"])
        return cls(**data)


class MatrixBuildMonitor:
    """거리 행렬 생성 모니터링 클래스"""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.metrics_history = []
        return cls._instance

    def monitor(self, stage_name: str):
        """collection을 첫 인자로 받는 메서드의 실행 시간/메모리 기록"""
        def decorator(func):
            @wraps(func)
            def wrapper(collection, *args, **kwargs):
                if not get_config('monitoring.enabled', True):
                    return func(collection, *args, **kwargs)

                track_memory = get_config('monitoring.track_memory', False)
                # 호출 측에서 이미 추적 중이면 시작/종료하지 않음
                owns_tracing = track_memory and not tracemalloc.is_tracing()
                start_memory = 0
                if owns_tracing:
                    tracemalloc.start()
                if track_memory:
                    start_memory = tracemalloc.get_traced_memory()[0]

                start_time = datetime.now()
                success = True
                error_message = ""

                try:
                    return func(collection, *args, **kwargs)

                except Exception as e:
                    success = False
                    error_message = str(e)
                    logger.error(f"Matrix build error: {error_message}")
                    logger.error(traceback.format_exc())
                    raise

                finally:
                    end_time = datetime.now()
                    memory_usage = 0.0
                    if track_memory:
                        current_memory = tracemalloc.get_traced_memory()[0]
                        memory_usage = (current_memory - start_memory) / 1024 / 1024  # MB
                    if owns_tracing:
                        tracemalloc.stop()

                    num_points = len(collection)
                    metrics = BuildMetrics(
                        stage_name=stage_name,
                        collection_id=getattr(collection, "id", ""),
                        start_time=start_time,
                        end_time=end_time,
                        num_points=num_points,
                        num_pairs=num_points * (num_points - 1) // 2,
                        execution_time=(end_time - start_time).total_seconds(),
                        memory_usage=memory_usage,
                        success=success,
                        error_message=error_message
                    )

                    self._record(metrics)
            return wrapper
        return decorator

    def _record(self, metrics: BuildMetrics):
        self.metrics_history.append(metrics)
        limit = get_config('monitoring.history_limit', 100)
        if len(self.metrics_history) > limit:
            del self.metrics_history[:-limit]
        self._log_metrics(metrics)

    def _log_metrics(self, metrics: BuildMetrics):
        logger.info(
            f"{metrics.stage_name} took {metrics.execution_time:.4f}s "
            f"(collection={metrics.collection_id!r}, points={metrics.num_points}, "
            f"pairs={metrics.num_pairs}, memory={metrics.memory_usage:.2f}MB)"
        )

        if not metrics.success:
            logger.error(f"행렬 생성 실패: {metrics.error_message}")

    def get_performance_summary(self) -> Dict[str, Any]:
        if not self.metrics_history:
            return {}

        total = len(self.metrics_history)
        return {
            "total_runs": total,
            "success_rate": sum(1 for m in self.metrics_history if m.success) / total,
            "average_execution_time": sum(m.execution_time for m in self.metrics_history) / total,
            "average_memory_usage": sum(m.memory_usage for m in self.metrics_history) / total,
            "max_points": max(m.num_points for m in self.metrics_history),
            "stage_distribution": self._get_stage_distribution()
        }

    def _get_stage_distribution(self) -> Dict[str, int]:
        distribution = {}
        for metrics in self.metrics_history:
            distribution[metrics.stage_name] = distribution.get(metrics.stage_name, 0) + 1
        return distribution

    def save_metrics(self, filepath: str):
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump([m.to_dict() for m in self.metrics_history], f, indent=2, ensure_ascii=False)

    def load_metrics(self, filepath: str):
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
            self.metrics_history = [BuildMetrics.from_dict(m) for m in data]

    def clear_metrics(self):
        """메트릭스 히스토리 초기화"""
        self.metrics_history = []

    @property
    def latest(self) -> Optional[BuildMetrics]:
        return self.metrics_history[-1] if self.metrics_history else None


build_monitor = MatrixBuildMonitor()
