# -*- coding: utf-8 -*-

"""Configuration module of the logs.

This module configure the python ``logging`` module, in order to have useful
and easy to activate logs when running programs built on defer.

Log entries are displayed to the output console and, if possible, written in
a file of the user log directory, rotated every day.

On console output, if the system supports it, logs entries will be colorized.

Warnings (like ``NothingToCancel``) are redirected to the logs. Non-caught
exceptions, including the ones raised by a deferred object's method when a
timer fires, are logged.
"""

import copy
import logging
import logging.handlers
import os.path
import sys
import threading

from . import path as defer_path

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
STRING_FORMAT = '%(asctime)s %(levelname)-7s %(name)s - %(message)s'


def _support_color_output():
    """Try to guess if the standard output supports color term code.

    Returns:
        boolean: True if we are sure the output supports color; False otherwise
    """
    if hasattr(sys.stdout, 'isatty') and sys.stdout.isatty():
        if not sys.platform.startswith('win'):
            return True
    return False


def _get_file_handler(filename):
    """Open a new file for using as a log output.

    The file is rotated at midnight; 7 old files are kept.

    Args:
        filename (str): name of the log file. Ex: 'defer.log'
    Returns:
        Handler: a valid handler using the log file, or None if the file
            creation has failed.
    """
    try:
        log_path = os.path.join(defer_path.get_log_dir(), filename)
        return logging.handlers.TimedRotatingFileHandler(
            log_path, when='midnight', backupCount=7)
    except (OSError, IOError):
        logging.getLogger(__name__).warning('Unable to create the log file',
                                            exc_info=True)
        return None


class ColoredFormatter(logging.Formatter):
    """Console formatter highlighting the level and the logger name.

    The record is copied before being modified: other handlers of the same
    record still see plain text.
    """

    RESET = '\033[0m'
    NAME_COLOR = '\033[36m'
    LEVEL_COLORS = {
        logging.DEBUG: '\033[34m',
        logging.INFO: '\033[32m',
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[31;1m',
    }

    def _paint(self, text, color):
        if not color:
            return text
        return color + text + self.RESET

    def format(self, record):
        record = copy.copy(record)
        record.levelname = self._paint(record.levelname,
                                       self.LEVEL_COLORS.get(record.levelno))
        record.name = self._paint(record.name, self.NAME_COLOR)
        return logging.Formatter.format(self, record)


def _excepthook(exctype, value, traceback):
    logging.getLogger(__name__).critical(
        'Uncaught exception', exc_info=(exctype, value, traceback))


def _threading_excepthook(args):
    if args.exc_type is SystemExit:
        return
    name = args.thread.name if args.thread else '???'
    logging.getLogger(__name__).error(
        'Uncaught exception in thread %s', name,
        exc_info=(args.exc_type, args.exc_value, args.exc_traceback))


class Context(object):
    """Context class used to open and close log handlers."""

    def __init__(self, filename='defer.log', to_file=True):
        """Prepare a new log context.

        Args:
            filename (str): name fo the log file. default to 'defer.log'
            to_file (bool): if False, logs are only sent to the console.
        """
        self._filename = filename
        self._to_file = to_file
        self._handlers = []
        self._excepthook = None
        self._threading_excepthook = None

    def __enter__(self):
        """Open the log file and prepare the logging module."""

        logging.captureWarnings(True)
        root_logger = logging.getLogger()

        stdout_handler = logging.StreamHandler()
        if _support_color_output():
            stdout_handler.setFormatter(
                ColoredFormatter(fmt=STRING_FORMAT, datefmt=DATE_FORMAT))
        else:
            stdout_handler.setFormatter(
                logging.Formatter(fmt=STRING_FORMAT, datefmt=DATE_FORMAT))
        self._handlers.append(stdout_handler)

        if self._to_file:
            file_handler = _get_file_handler(self._filename)
            if file_handler:
                file_handler.setFormatter(
                    logging.Formatter(fmt=STRING_FORMAT, datefmt=DATE_FORMAT))
                self._handlers.append(file_handler)

        for handler in self._handlers:
            root_logger.addHandler(handler)

        # Before any configuration, all messages should be displayed.
        set_debug_mode(True)

        self._excepthook = sys.excepthook
        self._threading_excepthook = threading.excepthook
        sys.excepthook = _excepthook
        threading.excepthook = _threading_excepthook
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Release resources (log files, ...)"""
        logging.getLogger(__name__).debug('Stop logger ...')
        root_logger = logging.getLogger()
        for handler in self._handlers:
            root_logger.removeHandler(handler)
            handler.close()
        del self._handlers[:]

        logging.captureWarnings(False)
        sys.excepthook = self._excepthook
        threading.excepthook = self._threading_excepthook


def set_logs_level(levels):
    """Configure a fine-grained log levels for the different modules.

    Args:
        levels (dict): A dict associating a module name and a log level. A
            log level can be a number or a str representing one of the
            logging levels (DEBUG, WARNING, ...). The level name will be
            converted to uppercase.
            Invalids values will be ignored.

    Example:

        >>> # Accept DEBUG logs only for the scheduled actions
        >>> set_logs_level({'defer': 'info', 'defer.actions': 'debug'})
    """
    for (module, level) in levels.items():
        try:
            if isinstance(level, str):
                level = int(level) if level.isdigit() else level.upper()
            logging.getLogger(module).setLevel(level)
        except (ValueError, TypeError):
            logger = logging.getLogger(__name__)
            logger.warning('Invalid log level "%s" for logger "%s". '
                           'Will be ignored.',
                           level, module)


def set_debug_mode(debug):
    """Set, or unset the debug log level.

    Note: modules others than defer.* are not set to DEBUG, even in DEBUG
    mode. If needed, their level can be set by ``set_logs_level()``.

    Args:
        debug (boolean): if True, the defer log level will be set to DEBUG.
            If False, it will be set to INFO.
    """
    if debug:
        logging.getLogger().setLevel(logging.INFO)
        logging.getLogger('defer').setLevel(logging.DEBUG)
    else:
        logging.getLogger().setLevel(logging.WARNING)
        logging.getLogger('defer').setLevel(logging.INFO)
