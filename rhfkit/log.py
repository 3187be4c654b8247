import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(log_dir: Optional[str] = "logs", level: int = logging.DEBUG) -> Optional[str]:
	"""
	Send log records to <log_dir>/rhfkit.log and return the file path.

	With log_dir=None records at INFO and above go to stderr instead, and None is returned.
	Does nothing if the root logger already has handlers.
	"""
	if log_dir is None:
		logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
		return None

	if not os.path.exists(log_dir):
		os.makedirs(log_dir)
	filename = os.path.join(log_dir, "rhfkit.log")
	logging.basicConfig(
		filename=filename,
		level=level,
		format=LOG_FORMAT,
	)
	return filename
