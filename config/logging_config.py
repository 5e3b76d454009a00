import json
import logging
import sys
from datetime import UTC, datetime

# Context passed through `extra=` by the request log, the provider pipeline and the rate service.
CONTEXT_FIELDS = (
    'method', 'path', 'status_code', 'duration_ms', 'client_ip',
    'operation', 'provider', 'cache_key',
)


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record, with request and provider context lifted
    from `extra` so log shippers can index on them.
    """
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'ts': datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'msg': record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value

        if record.exc_info:
            entry['error'] = record.exc_info[0].__name__
            entry['stack'] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = 'INFO', json_format: bool = False) -> None:
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)

    console_handler = logging.StreamHandler(sys.stdout)
    if json_format:
        console_handler.setFormatter(JSONFormatter())
    else:
        console_format = '%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s'
        console_handler.setFormatter(logging.Formatter(console_format, datefmt='%H:%M:%S'))
    root_logger.addHandler(console_handler)
