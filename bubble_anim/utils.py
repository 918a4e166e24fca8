import logging
import os
import sys
import time
import traceback

LOG_DIR_ENV = 'BUBBLE_ANIM_LOG_DIR'
_LOG_FORMAT = '[%(asctime)s] %(message)s'
_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def log_dir() -> str:
    return os.environ.get(LOG_DIR_ENV) or os.path.join(os.path.dirname(__file__), 'logs')


def ensure_dirs(base_dir=None) -> str:
    base = base_dir or log_dir()
    os.makedirs(base, exist_ok=True)
    return base


class _LazyFileHandler(logging.FileHandler):
    """FileHandler that creates the log directory on the first write, not at import."""

    def _open(self):
        os.makedirs(os.path.dirname(self.baseFilename), exist_ok=True)
        return super()._open()

    def emit(self, record):
        try:
            super().emit(record)
        except OSError:
            self.handleError(record)


def get_logger(name: str, filename: str = 'engine_debug.log') -> logging.Logger:
    """Logger appending timestamped lines to ``logs/<filename>``.

    The handler is attached once per logger. Nothing touches the filesystem
    until the first record is emitted; an unwritable directory is
    reported through ``Handler.handleError`` and never reaches the caller.
    """
    logger = logging.getLogger(f'bubble_anim.{name}')
    if logger.handlers:
        return logger
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = _LazyFileHandler(os.path.join(log_dir(), filename), encoding='utf-8', delay=True)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    logger.addHandler(handler)
    return logger


def install_crash_logger(filename: str = 'crash_error.log') -> None:
    """Write uncaught exceptions to ``logs/<filename>``, then defer to the default hook."""
    def _log_exception(etype, value, tb):
        try:
            with open(os.path.join(ensure_dirs(), filename), 'w', encoding='utf-8') as f:
                f.write(f"Timestamp: {time.time()}\n")
                f.write("".join(traceback.format_exception(etype, value, tb)))
        except OSError:
            pass
        sys.__excepthook__(etype, value, tb)

    sys.excepthook = _log_exception
