"""Counters and timings for the dashboard's /metrics endpoint."""
from typing import List, Dict, Any, Optional
from collections import defaultdict
import time


class MetricsCollector:
    """Collects counters plus a short time-series per metric."""

    def __init__(self, service_name: str, max_datapoints: int = 500):
        self.service_name = service_name
        self.metrics: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        self.counters: Dict[str, int] = defaultdict(int)
        self.max_datapoints = max_datapoints

    def increment(self, metric_name: str, value: int = 1, tags: Dict[str, str] = None):
        """Increment a counter metric."""
        self.counters[metric_name] += value
        self._add_datapoint(metric_name, value, "counter", tags)

    def timing(self, metric_name: str, duration_ms: float, tags: Dict[str, str] = None):
        """Record a timing metric."""
        self._add_datapoint(metric_name, duration_ms, "timing", tags)

    def _add_datapoint(self, metric_name: str, value: float, metric_type: str, tags: Dict[str, str] = None):
        datapoint = {
            "timestamp": time.time(),
            "value": value,
            "type": metric_type,
            "tags": tags or {}
        }
        series = self.metrics[metric_name]
        series.append(datapoint)
        if len(series) > self.max_datapoints:
            del series[:-self.max_datapoints]

    def get_metric_data(self, metric_name: str, time_period_minutes: Optional[int] = 60) -> List[Dict[str, Any]]:
        """Get metric data for a time period; None means everything kept."""
        if metric_name not in self.metrics:
            return []
        if time_period_minutes is None:
            return list(self.metrics[metric_name])

        cutoff_time = time.time() - (time_period_minutes * 60)
        return [
            dp for dp in self.metrics[metric_name]
            if dp["timestamp"] >= cutoff_time
        ]

    def get_all_metrics(self, time_period_minutes: Optional[int] = 60) -> Dict[str, Any]:
        return {
            "service": self.service_name,
            "timestamp": time.time(),
            "counters": dict(self.counters),
            "time_series": {
                name: self.get_metric_data(name, time_period_minutes)
                for name in self.metrics
            },
        }
