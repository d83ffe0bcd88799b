from abc import ABC, abstractmethod


class BaseMetricsSink(ABC):
    """
    Abstract sink for request duration observations

    Injected into storage clients at construction so tests can swap in a
    recording or no-op sink instead of the process-wide collector.

    Implementations:
    - HistogramCollector (in-memory histogram vec)
    - NoopMetricsSink (discards everything)
    """

    @abstractmethod
    def observe(self, operation: str, status_code: str, duration: float) -> None:
        """
        Record one request

        Args:
            operation: Operation label (e.g. OBS.GetObject)
            status_code: Outcome label ("200", "404", "500", "cancel")
            duration: Wall time in seconds
        """
