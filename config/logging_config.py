import json
import logging
import sys
import traceback
from datetime import datetime
from decimal import Decimal
from logging.handlers import RotatingFileHandler
from pathlib import Path


class CustomJSONEncoder(json.JSONEncoder):
	def default(self, o):
		if isinstance(o, datetime):
			return o.isoformat()
		if isinstance(o, Decimal):
			return str(o)
		return super().default(o)


class JSONFormatter(logging.Formatter):
	"""
	Custom formatter that outputs structured JSON logs.
	"""

	def format(self, record: logging.LogRecord) -> str:
		log_entry = {
			'timestamp': datetime.fromtimestamp(record.created).isoformat(),
			'level': record.levelname,
			'logger': record.name,
			'message': record.getMessage(),
			'module': record.module,
			'function': record.funcName,
			'line': record.lineno,
		}

		if record.exc_info and record.exc_info[0] is not None:
			log_entry['exception'] = {
				'type': record.exc_info[0].__name__,
				'message': str(record.exc_info[1]),
				'traceback': traceback.format_exception(*record.exc_info),
			}

		return json.dumps(log_entry, ensure_ascii=False, cls=CustomJSONEncoder)


CONSOLE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s'


def setup_logging(
	level: str = 'INFO',
	log_directory: str | None = None,
	max_file_size: int = 10 * 1024 * 1024,
	backup_count: int = 5,
) -> None:
	"""Configure the root logger: console always, rotating JSON file when a directory is given."""
	root_logger = logging.getLogger()
	root_logger.handlers.clear()
	root_logger.setLevel(logging.DEBUG)

	logging.getLogger('httpx').setLevel(logging.WARNING)
	logging.getLogger('httpcore').setLevel(logging.WARNING)

	console_handler = logging.StreamHandler(sys.stdout)
	console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
	console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
	root_logger.addHandler(console_handler)

	if log_directory:
		directory = Path(log_directory)
		directory.mkdir(parents=True, exist_ok=True)
		file_handler = RotatingFileHandler(
			directory / 'conversions.log',
			maxBytes=max_file_size,
			backupCount=backup_count,
			encoding='utf-8',
		)
		file_handler.setLevel(logging.DEBUG)
		file_handler.setFormatter(JSONFormatter())
		root_logger.addHandler(file_handler)
