"""Logging setup for the worktree commands.

Diagnostics go to stderr; progress meant for the user goes through
DisplayService instead. With ``--debug`` a full trace of every git command
is also written to ``<home>/.git-worktree-keeper/git-worktree-keeper.log``.
"""
import logging
import os
import sys
from typing import Mapping, Optional

from git_worktree_keeper.exceptions import HomeNotSetError
from git_worktree_keeper.utils.paths import resolve_home

LOG_DIRNAME = '.git-worktree-keeper'
LOG_FILENAME = 'git-worktree-keeper.log'

DEBUG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_PACKAGE_PREFIXES = ('git_worktree_keeper.', 'services.')


class ColoredFormatter(logging.Formatter):
    """Colors the level name on a terminal without touching the shared record."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, fmt=None, datefmt=None, stream=None):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.stream = stream if stream is not None else sys.stderr

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if not color or not self.stream.isatty():
            return super().format(record)
        # Other handlers see the same record object
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def debug_log_path(environ: Optional[Mapping[str, str]] = None) -> str:
    """Location of the debug log file under the user's home directory."""
    return os.path.join(resolve_home(environ), LOG_DIRNAME, LOG_FILENAME)


def setup_logging(
    verbose: bool = False,
    debug: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """Configure the root logger for one command run.

    WARNING by default, INFO with ``verbose``, DEBUG with ``debug``. GitPython's
    own command logging only shows up in debug mode.

    Args:
        verbose: Show state transitions
        debug: Show everything and write it to the debug log file
        environ: Environment used to find the home directory (os.environ if omitted)

    Returns:
        Path of the debug log file, or None when none is written
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    if debug:
        console_handler.setFormatter(ColoredFormatter(fmt=DEBUG_FORMAT, datefmt=DATE_FORMAT))
    else:
        console_handler.setFormatter(ColoredFormatter(fmt='[%(name)s] %(message)s'))
    root_logger.addHandler(console_handler)

    logging.getLogger('git').setLevel(logging.DEBUG if debug else logging.WARNING)

    if not debug:
        return None

    try:
        log_file = debug_log_path(environ)
    except HomeNotSetError:
        root_logger.warning("HOME is not set; debug log file disabled")
        return None
    os.makedirs(os.path.dirname(log_file), exist_ok=True)
    file_handler = logging.FileHandler(log_file, mode='w')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(fmt=DEBUG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(file_handler)
    return log_file


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, named without the package prefix."""
    for prefix in _PACKAGE_PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix):]
    return logging.getLogger(name)
