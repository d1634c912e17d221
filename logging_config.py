import logging
from datetime import datetime, timezone


class UTCFormatter(logging.Formatter):
    def formatTime(self, record, datefmt=None):
        record_time = datetime.fromtimestamp(record.created, timezone.utc)
        return record_time.strftime(datefmt) if datefmt else record_time.isoformat()


def setup_logging(name: str | None = None, level: str = "INFO") -> logging.Logger:
    root = logging.getLogger()
    if not root.handlers:
        formatter = UTCFormatter(
            fmt="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        handler = logging.StreamHandler()
        handler.setFormatter(formatter)

        root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
        root.addHandler(handler)

    return logging.getLogger(name)
