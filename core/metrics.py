"""
Request duration metrics

Prometheus histogram vec labelled by (operation, status_code). The
process-wide collector registers in the default prometheus_client registry,
so whatever exposes that registry (start_http_server, a /metrics route)
exports it. One collector is shared by every storage client in the process.
"""

import logging
from dataclasses import dataclass

from prometheus_client import REGISTRY, CollectorRegistry, Histogram

from core.interfaces.metrics import BaseMetricsSink

logger = logging.getLogger(__name__)

DEFAULT_DURATION_BUCKETS = (0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0)
LABEL_NAMES = ("operation", "status_code")


@dataclass(slots=True)
class HistogramSeries:
    """Snapshot of a single label pair (bucket_counts ends with the +Inf slot)"""

    bucket_counts: list[int]
    sum: float = 0.0
    count: int = 0

    def cumulative_counts(self) -> list[int]:
        """Counts per upper bound, Prometheus style (each bucket includes the ones below)"""
        total = 0
        result = []
        for value in self.bucket_counts:
            total += value
            result.append(total)
        return result


class HistogramCollector(BaseMetricsSink):
    """
    Prometheus histogram vec with "operation" and "status_code" labels

    Without a registry the histogram lives in a private CollectorRegistry
    (nothing else sees it); pass prometheus_client.REGISTRY to export it.

    Example:
        >>> hist = HistogramCollector("obs_request_duration_seconds", "Time spent doing Obs requests.")
        >>> hist.observe("OBS.GetObject", "200", 0.07)
        >>> hist.series("OBS.GetObject", "200").count
        1
    """

    def __init__(
        self,
        name: str,
        help: str,
        buckets: tuple[float, ...] = DEFAULT_DURATION_BUCKETS,
        namespace: str = "",
        registry: CollectorRegistry | None = None,
    ):
        self.name = name
        self.help = help
        self.buckets = tuple(sorted(buckets))
        self.namespace = namespace
        self.registry = registry if registry is not None else CollectorRegistry()
        self.histogram = Histogram(
            name,
            help,
            LABEL_NAMES,
            namespace=namespace,
            buckets=self.buckets,
            registry=self.registry,
        )

    @property
    def full_name(self) -> str:
        """Metric name including namespace (e.g. cortex_obs_request_duration_seconds)"""
        if self.namespace:
            return f"{self.namespace}_{self.name}"
        return self.name

    def observe(self, operation: str, status_code: str, duration: float) -> None:
        self.histogram.labels(operation, status_code).observe(duration)

    def _snapshot(self) -> dict[tuple[str, str], HistogramSeries]:
        cumulative: dict[tuple[str, str], list[int]] = {}
        sums: dict[tuple[str, str], float] = {}
        counts: dict[tuple[str, str], int] = {}

        for metric in self.histogram.collect():
            for sample in metric.samples:
                key = (sample.labels.get("operation"), sample.labels.get("status_code"))
                if sample.name.endswith("_bucket"):
                    cumulative.setdefault(key, []).append(int(sample.value))
                elif sample.name.endswith("_sum"):
                    sums[key] = sample.value
                elif sample.name.endswith("_count"):
                    counts[key] = int(sample.value)

        result = {}
        for key, totals in cumulative.items():
            # Samples come in upper-bound order; undo the accumulation
            per_bucket = [b - a for a, b in zip([0] + totals[:-1], totals)]
            result[key] = HistogramSeries(
                bucket_counts=per_bucket, sum=sums.get(key, 0.0), count=counts.get(key, 0)
            )
        return result

    def series(self, operation: str, status_code: str) -> HistogramSeries | None:
        """Get the series for one label pair, or None if never observed"""
        return self._snapshot().get((operation, status_code))

    def labels(self) -> list[tuple[str, str]]:
        """All observed (operation, status_code) pairs"""
        return list(self._snapshot())

    def reset(self) -> None:
        """Drop all observed series"""
        self.histogram.clear()


class NoopMetricsSink(BaseMetricsSink):
    """Metrics sink that discards every observation"""

    def observe(self, operation: str, status_code: str, duration: float) -> None:
        pass


# Singleton pattern
_obs_request_duration: HistogramCollector | None = None


def get_obs_request_duration() -> HistogramCollector:
    """
    Get the process-wide OBS request duration histogram (singleton)

    Registered in the default prometheus_client registry. Namespace and
    buckets come from config/providers/storage.yaml
    """
    global _obs_request_duration
    if _obs_request_duration is None:
        from config.settings import get_settings

        settings = get_settings()
        _obs_request_duration = HistogramCollector(
            name="obs_request_duration_seconds",
            help="Time spent doing Obs requests.",
            buckets=tuple(settings.OBS_REQUEST_DURATION_BUCKETS),
            namespace=settings.OBS_METRICS_NAMESPACE,
            registry=REGISTRY,
        )
        logger.debug(f"Registered histogram {_obs_request_duration.full_name}")
    return _obs_request_duration
