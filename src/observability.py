import logging
import json
import sys
from typing import Dict, Any

from prometheus_client import Counter, Histogram, start_http_server


# ─── Structured Logging ───
class JsonFormatter(logging.Formatter):
    """
    Formatter that outputs one JSON object per record for log shippers (ELK, Loki, etc).
    """
    def format(self, record):
        log_obj: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "process_id": record.process,
        }
        # Merge extra properties if present
        if hasattr(record, "props") and isinstance(record.props, dict):  # type: ignore
            log_obj.update(record.props)  # type: ignore

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, default=str)


TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level=logging.INFO, fmt: str = "text"):
    """Configures the root logger to write to stdout, as JSON lines or plain text."""
    handler = logging.StreamHandler(sys.stdout)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root_logger = logging.getLogger()
    # Remove existing handlers to prevent duplicate logs
    if root_logger.handlers:
        root_logger.handlers = []

    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    logging.getLogger(__name__).debug("Logger initialized at level %s", logging.getLevelName(level))


# ─── Prometheus Metrics ───
STATS_READ_DURATION = Histogram(
    'maxhash_stats_read_duration_seconds',
    'Time spent reading ckpool stats files',
    ['source'],
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0)
)

STATS_READ_ERRORS = Counter(
    'maxhash_stats_read_errors_total',
    'Total number of failed ckpool stats reads',
    ['source']
)

INVALID_DIFFICULTY_TOTAL = Counter(
    'maxhash_invalid_difficulty_total',
    'Difficulty values that rendered as Invalid',
    ['field']
)


def start_metrics_server(port=9100):
    """Starts a background thread to serve Prometheus metrics."""
    try:
        start_http_server(port)
        logging.getLogger(__name__).info("Metrics server started on port %d", port)
    except OSError as e:
        logging.getLogger(__name__).error("Failed to start metrics server: %s", e)
