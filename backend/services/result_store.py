"""
Result Store - In-memory collection of loaded analysis logs
"""

from __future__ import annotations

from models.result import AnalysisLog, AnalysisResult, ResultId

from .events import Signal


class ResultStore:
    """Loaded analysis logs keyed by uri"""

    def __init__(self):
        self._logs: dict[str, AnalysisLog] = {}
        # Only removals are signalled: a new log needs a selection before it renders
        self.logs_removed = Signal("logs.removed")

    @property
    def logs(self) -> list[AnalysisLog]:
        return list(self._logs.values())

    def add_log(self, log: AnalysisLog) -> None:
        """Add a log, replacing one with the same uri"""
        self._logs[log.uri] = log

    def remove_log(self, uri: str) -> bool:
        log = self._logs.pop(uri, None)
        if log is None:
            return False
        self.logs_removed.emit([log])
        return True

    def find_log(self, result_id: ResultId) -> AnalysisLog | None:
        return self._logs.get(result_id.log_uri)

    def find_result(self, result_id: ResultId) -> AnalysisResult | None:
        log = self.find_log(result_id)
        if log is None:
            return None
        for result in log.results:
            if result.id == result_id:
                return result
        return None
