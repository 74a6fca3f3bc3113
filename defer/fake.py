# -*- coding: utf-8 -*-

"""A minimal Deferred object, mostly useful to test code using deferreds.

It implements all the methods a Deferred object can expose, and reports
them to simple callbacks.
"""

import time
from .status import Status


class Notice(object):
    """A notification received by a FakeDeferred.

    Attributes:
        time (float): timestamp of the notification.
        data (tuple): arguments of the notification.
        context: the context given to `notify_with()`.
    """

    def __init__(self, data, context=None):
        if not isinstance(data, (list, tuple)):
            raise TypeError('data must be a list or a tuple')

        self.time = time.time()
        self.data = tuple(data)
        self.context = context


class FakeDeferred(object):
    """Deferred object calling a function when it's settled.

    Settlement is not guarded: each call to `resolve()` or `reject()`
    updates the status and calls `when_finished` again.

    Attributes:
        status (Status)
        context: set by `resolve_with()` and `reject_with()`. It's the
            FakeDeferred itself by default.
        data (tuple): arguments of the last settlement.
        started (float): timestamp of the creation.
        finished (float): timestamp of the last settlement, or None.
    """

    def __init__(self, when_finished, when_notified=None):
        """
        Args:
            when_finished (callable): called with the arguments of the
                settlement.
            when_notified (callable|list, optional): if it's a callable, it's
                called with the arguments of each notification. If it's a
                list, a `Notice` is appended for each notification.
        """
        if not callable(when_finished):
            raise TypeError('when_finished must be a function')

        self.when_finished = when_finished
        self.when_notified = when_notified

        self.status = Status.PENDING
        self.context = self
        self.data = None
        self.started = time.time()
        self.finished = None

    def _note(self, data, context):
        if callable(self.when_notified):
            self.when_notified(*data)
        elif isinstance(self.when_notified, list):
            self.when_notified.append(Notice(data, context))

    def _finish(self, status, data):
        self.status = status
        self.data = data
        self.finished = time.time()

        self.when_finished(*data)

    def resolve(self, *args):
        self._finish(Status.RESOLVED, args)

    def reject(self, *args):
        self._finish(Status.REJECTED, args)

    def notify(self, *args):
        self._note(args, self.context)

    def resolve_with(self, context, *args):
        self.context = context
        self.resolve(*args)

    def reject_with(self, context, *args):
        self.context = context
        self.reject(*args)

    def notify_with(self, context, *args):
        self._note(args, context)
