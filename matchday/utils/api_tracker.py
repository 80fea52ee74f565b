"""
API Usage Tracking Module

Tracks requests issued to football-data.org during the current process.
The free plan allows roughly 10 requests per minute; the counters here
make it visible how much of that budget a command consumed.
"""

from collections import Counter, deque
from datetime import datetime
from typing import Optional, Dict, Any


class APITracker:
    """
    In-memory request tracker for one API source.

    Features:
    - Request counts per endpoint
    - Failure counts per error type
    - Bounded log of recent requests for debugging
    """

    def __init__(self, source_name: str = 'football_data', max_log_entries: int = 200):
        """
        Initialize API tracker.

        Args:
            source_name: Identifier for the API source
            max_log_entries: How many recent requests to keep in the log
        """
        self.source_name = source_name
        self._session_start = datetime.now()
        self._session_requests = 0
        self._endpoint_counts: Counter = Counter()
        self._failures: Counter = Counter()
        self._request_log: deque = deque(maxlen=max_log_entries)

    def record_request(
        self,
        endpoint: str,
        params: Optional[Dict] = None,
        response_status: Optional[int] = None,
        response_time_ms: Optional[float] = None,
        error_type: Optional[str] = None
    ) -> int:
        """
        Record an issued request.

        Args:
            endpoint: API endpoint called
            params: Query parameters
            response_status: HTTP status code (None for transport failures)
            response_time_ms: Response time in milliseconds
            error_type: Name of the error raised for this request, if any

        Returns:
            Number of requests recorded in this session
        """
        self._session_requests += 1
        self._endpoint_counts[endpoint] += 1
        if error_type:
            self._failures[error_type] += 1

        self._request_log.append({
            'timestamp': datetime.now(),
            'endpoint': endpoint,
            'params': params,
            'status': response_status,
            'time_ms': response_time_ms,
            'error': error_type
        })

        return self._session_requests

    @property
    def total_requests(self) -> int:
        return self._session_requests

    @property
    def failed_requests(self) -> int:
        return sum(self._failures.values())

    def recent_requests(self, limit: int = 10) -> list:
        return list(self._request_log)[-limit:]

    def get_session_stats(self) -> Dict[str, Any]:
        """
        Get statistics for current session.

        Returns:
            Dictionary with session statistics
        """
        duration = (datetime.now() - self._session_start).total_seconds()
        return {
            'source': self.source_name,
            'session_start': self._session_start.isoformat(),
            'session_duration_seconds': round(duration, 1),
            'requests_made': self._session_requests,
            'failed_requests': self.failed_requests,
            'requests_by_endpoint': dict(self._endpoint_counts),
            'failures_by_type': dict(self._failures),
        }
