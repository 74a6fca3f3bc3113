# -*- coding: utf-8 -*-

from .__version__ import __version__  # noqa

import logging

from . import actions
from .actions import (Action, Registration, schedule, schedule_notify,
                      schedule_notify_with, schedule_reject,
                      schedule_reject_with, schedule_resolve,
                      schedule_resolve_with)
from .common import config
from .common import log
from .deferred_promise import DeferredPromise
from .errors import InvalidArgument, NothingToCancel
from .promise import Promise, TimeoutError
from .status import Status

__all__ = ['actions', 'Action', 'Registration', 'schedule',
           'schedule_notify', 'schedule_notify_with', 'schedule_reject',
           'schedule_reject_with', 'schedule_resolve',
           'schedule_resolve_with', 'DeferredPromise', 'InvalidArgument',
           'NothingToCancel', 'Promise', 'TimeoutError', 'Status']


def main():
    """Entry point of the demo: a delayed resolution with progress notices."""

    with log.Context(to_file=False):
        logger = logging.getLogger(__name__)

        config.load()
        log.set_debug_mode(config.get('debug_mode'))
        log.set_logs_level(config.get('log_levels'))

        df = DeferredPromise()
        df.progress(lambda step: logger.info('Still working (%s) ...', step))
        df.done(lambda value: logger.info('Resolved with %r', value))

        notifier = schedule_notify(df, 200, 'tick')
        schedule_resolve(df, 1000, 'All done')

        try:
            df.promise().result(5)
        except TimeoutError:
            logger.error('The deferred object has not been resolved in time')
        finally:
            notifier.cancel()

        logger.info('Final status: %s', df.status.value)


if __name__ == "__main__":
    main()
