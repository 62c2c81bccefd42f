"""
Lightweight timing of recognition / recommendation service calls.
"""
import time
import logging
from contextlib import contextmanager
from typing import Dict

logger = logging.getLogger(__name__)


class Profiler:
    """Records the duration of the most recent run of each named operation"""

    def __init__(self):
        self.timings: Dict[str, float] = {}

    @contextmanager
    def measure(self, operation: str):
        """Context manager for measuring operation time, recorded even on error"""
        started = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - started
            self.timings[operation] = elapsed
            logger.debug(f"{operation}: {elapsed*1000:.2f}ms")

    def get_timings(self) -> Dict[str, float]:
        """Get all recorded timings"""
        return self.timings.copy()

    def log_summary(self, prefix: str = "") -> None:
        """Log a summary of all timings, slowest first"""
        if not self.timings:
            return

        total = sum(self.timings.values())
        lines = [f"{prefix}Profiling Summary:"]
        for operation, elapsed in sorted(self.timings.items(), key=lambda x: x[1], reverse=True):
            percentage = (elapsed / total * 100) if total > 0 else 0
            lines.append(f"{prefix}  {operation}: {elapsed*1000:.2f}ms ({percentage:.1f}%)")
        lines.append(f"{prefix}  Total: {total*1000:.2f}ms")
        logger.info("\n".join(lines))

    def reset(self) -> None:
        """Forget earlier timings so the next summary covers one request"""
        self.timings.clear()
