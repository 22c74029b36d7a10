"""Shared logging utilities for the site server and CLI."""

import logging

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'
LOG_DATE_FORMAT = '%H:%M:%S'


class HealthCheckFilter(logging.Filter):
    """Filter out health check requests from uvicorn access logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Return False to suppress health check log entries."""
        return '/health' not in record.getMessage()


def configure_logging(level: int = logging.INFO) -> None:
    """Configure the root log format and suppress uvicorn health check entries."""
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    logging.getLogger('uvicorn.access').addFilter(HealthCheckFilter())
