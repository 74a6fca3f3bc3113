# -*- coding: utf-8 -*-

"""Simple functions for deferring the actions of a Deferred object.

An action is a call to one of the methods a Deferred object exposes:
``resolve``, ``reject``, ``notify``, ``resolve_with``, ``reject_with`` and
``notify_with``. Each call to ``schedule()`` (or to one of its shortcuts)
starts a timer and returns a ``Registration`` controlling it.

Example:

    >>> df = DeferredPromise()
    >>> notifier = schedule_notify(df, 100, 'still working')
    >>> schedule_resolve(df, 1000, 'done')
    >>> df.always(lambda _: notifier.cancel())

Delays are expressed in milliseconds. Timers are ``threading.Timer``
instances: the Deferred object's methods are called from the timer threads.
"""

from enum import Enum
import itertools
import logging
import math
from numbers import Real
from threading import Lock, Timer
import warnings

from .common import config
from .errors import InvalidArgument, NothingToCancel
from .util import has_method, is_deferred

_logger = logging.getLogger(__name__)

_timer_counter = itertools.count(1)


class Action(Enum):
    """The six actions of a Deferred object that can be scheduled.

    The value of each member is the name of the method called.
    """

    RESOLVE = 'resolve'
    REJECT = 'reject'
    NOTIFY = 'notify'
    RESOLVE_WITH = 'resolve_with'
    REJECT_WITH = 'reject_with'
    NOTIFY_WITH = 'notify_with'


def need_delay(delay):
    """Check a delay is a number (in milliseconds) greater than zero.

    NaN and infinite values are refused: a timer can't be armed with them.

    Raises:
        InvalidArgument: if the delay is not valid.
    """
    if isinstance(delay, bool) or not isinstance(delay, Real) or \
            not math.isfinite(delay) or delay <= 0:
        raise InvalidArgument('delay must be a finite number greater than '
                              'zero: %r' % (delay,))


def _need_action(method):
    if isinstance(method, Action):
        return method
    try:
        return Action(method)
    except ValueError:
        raise InvalidArgument('method must be one of %s: %r'
                              % (', '.join(a.value for a in Action), method))


class Registration(object):
    """Keeps track of a deferred action, and allows to control its timer.

    A Registration is created by ``schedule()`` and is already running when
    it's returned. It doesn't own the deferred object: many registrations
    can drive the same object.

    Attributes:
        deferred: the Deferred object.
        action (Action): the action performed on `deferred`.
        method (callable): `deferred`'s bound method, called by the timer.
        delay (float): the delay, in milliseconds.
        repeat (bool): is this a repeating event?
        args (tuple): the arguments for the `method` call.
        timer (Timer): the running timer, or None when the event is not
            scheduled. It's set to None by `cancel()`, or when a
            non-repeating event has run once.
    """

    def __init__(self, deferred, action, delay, repeat, args):
        self.deferred = deferred
        self.action = action
        self.method = getattr(deferred, action.value)
        self.delay = delay
        self.repeat = repeat
        self.args = args
        self.timer = None

        self._lock = Lock()

    @property
    def active(self):
        """bool: True if the timer is running."""
        return self.timer is not None

    def cancel(self):
        """Cancel the event now.

        The deferred object is never modified.
        If the event is not running, a ``NothingToCancel`` warning is emitted
        and nothing else happens.
        """
        with self._lock:
            timer = self.timer
            self.timer = None
            if timer is not None:
                timer.cancel()

        if timer is None:
            warnings.warn('%r was not running' % self, NothingToCancel,
                          stacklevel=2)
        else:
            _logger.debug('Cancel %r', self)

    def restart(self, delay=None):
        """Restart the timer.

        If the event is running, it's cancelled first. The action, the
        `repeat` flag and the arguments are kept.

        Args:
            delay (float, optional): if set, it becomes the new delay, in
                milliseconds.
        Raises:
            InvalidArgument: if the new delay is not valid.
        """
        if delay is None:
            delay = self.delay
        if delay != self.delay:
            need_delay(delay)

        with self._lock:
            self.delay = delay
            if self.timer is not None:
                self.timer.cancel()
            self._arm()
        _logger.debug('Start %r', self)

    def _arm(self):
        """Start a new timer. self._lock must be acquired."""
        timer = Timer(self.delay / 1000.0, lambda: self._fire(timer))
        timer.name = '%s %s #%s' % (config.get('timer_name'),
                                    self.action.value, next(_timer_counter))
        timer.daemon = config.get('daemon_timers')
        self.timer = timer
        timer.start()

    def _fire(self, timer):
        with self._lock:
            if self.timer is not timer:
                # Cancelled or restarted while the timer was expiring.
                return
            if not self.repeat:
                self.timer = None

        try:
            self.method(*self.args)
        finally:
            if self.repeat:
                with self._lock:
                    if self.timer is timer:
                        self._arm()

    def __repr__(self):
        return '<Registration %s(%s) every=%s delay=%sms %s>' % (
            self.action.value, ', '.join(repr(a) for a in self.args),
            self.repeat, self.delay,
            'active' if self.active else 'inactive')


def schedule(deferred, method, delay, repeat, *args):
    """Schedule a call to one of the methods of a Deferred object.

    Args:
        deferred: the Deferred object. Any object having callable
            `resolve` and `reject` attributes, and the scheduled method, is
            accepted.
        method (Action|str): the action, or the name of its method.
        delay (float): the delay before the call, in milliseconds.
        repeat (bool): if True, the call is repeated every `delay` ms until
            the Registration is cancelled. Otherwise, the call is done once.
        *args: the arguments passed to the method.
    Returns:
        Registration: the registration, already running.
    Raises:
        InvalidArgument: if one of the arguments is not valid. In this case,
            nothing is scheduled.
    """
    if deferred is None:
        raise InvalidArgument('deferred must be an object')
    action = _need_action(method)
    need_delay(delay)
    if not isinstance(repeat, bool):
        raise InvalidArgument('repeat must be a boolean: %r' % (repeat,))
    if not has_method(deferred, action.value):
        raise InvalidArgument('deferred.%s must be a function'
                              % action.value)
    if not is_deferred(deferred):
        raise InvalidArgument('deferred must have resolve() and reject() '
                              'methods: %r' % (deferred,))

    reg = Registration(deferred, action, delay, repeat, args)
    reg.restart()
    return reg


def _shortcut(action, repeat=False):

    def shortcut(deferred, delay, *args):
        return schedule(deferred, action, delay, repeat, *args)

    shortcut.__name__ = 'schedule_%s' % action.value
    shortcut.__qualname__ = shortcut.__name__
    shortcut.__doc__ = """Schedule `deferred.%s(*args)` %s.

    Args:
        deferred: the Deferred object.
        delay (float): the delay, in milliseconds.
        *args: the arguments passed to the method.
    Returns:
        Registration: the registration, already running.
    """ % (action.value, 'every `delay` ms' if repeat else 'after `delay` ms')
    return shortcut


schedule_resolve = _shortcut(Action.RESOLVE)
schedule_reject = _shortcut(Action.REJECT)
schedule_notify = _shortcut(Action.NOTIFY, repeat=True)
schedule_resolve_with = _shortcut(Action.RESOLVE_WITH)
schedule_reject_with = _shortcut(Action.REJECT_WITH)
schedule_notify_with = _shortcut(Action.NOTIFY_WITH, repeat=True)
