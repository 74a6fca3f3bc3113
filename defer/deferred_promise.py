# -*- coding: utf-8 -*-

import logging
from threading import Lock
from .promise import Promise, callback_batch
from .status import Status

_logger = logging.getLogger(__name__)


def _flatten(handlers):
    """Yield the callables of a (possibly nested) list of handlers.

    Lists and tuples are browsed recursively. Other values are ignored.
    """
    for handler in handlers:
        if callable(handler):
            yield handler
        elif isinstance(handler, (list, tuple)):
            for sub_handler in _flatten(handler):
                yield sub_handler
        else:
            _logger.debug('Ignore non-callable handler %r', handler)


def _pack(values):
    """Convert the arguments of resolve() or reject() into a single value."""
    if not values:
        return None
    if len(values) == 1:
        return values[0]
    return values


class DeferredPromise(object):
    """A Deferred object built on top of a chain of Promises.

    A Promise can only be resolved or rejected. A DeferredPromise adds the
    callback registration style of the classic Deferred objects: `done()`,
    `fail()`, `always()`, and a progress channel with `progress()` and
    `notify()`.

    Each handler registered by `done()`, `fail()` or `always()` creates a new
    Promise, chained to the last one. Handlers are so called in the order of
    registration, each one receiving the value returned by the previous link
    of the chain.

    Progress handlers are not part of the chain. They receive the arguments
    of `notify()` directly, even after the settlement.

    Calling `resolve()` or `reject()` twice has no other effect than the
    warning logged by the Promise.

    Handlers can be added from any thread: the chain stays linear.

    Attributes:
        status (Status): settlement state; read-only.
    """

    def __init__(self):
        self._status = Status.PENDING
        self._progress_handlers = []
        self._lock = Lock()

        def executor(resolve, reject):
            self._resolve = resolve
            self._reject = reject

        initial = Promise(executor, _name='DEFERRED')
        self._promises = [initial.then(self._on_resolved, self._on_rejected)]

    @property
    def status(self):
        return self._status

    def _on_resolved(self, value):
        self._status = Status.RESOLVED
        return value

    def _on_rejected(self, reason):
        self._status = Status.REJECTED
        # keep the chain rejected for the next links.
        return Promise.reject(reason)

    def promise(self, offset=-1):
        """Get one of the Promises of the chain.

        Args:
            offset (int, optional): position of the Promise in the chain.
                Negative values start from the end. The default is the last
                Promise created.
        Returns:
            Promise
        Raises:
            IndexError: if there is no Promise at this position.
        """
        with self._lock:
            return self._promises[offset]

    def then(self, on_resolved=None, on_rejected=None, on_progress=None):
        """Chain a new Promise to the last one.

        Args:
            on_resolved (callable, optional): called with the result of the
                last Promise, if it's resolved.
            on_rejected (callable, optional): called with the reason of the
                rejection of the last Promise.
            on_progress (callable, optional): added to the progress handlers.
        Returns:
            Promise: the new last Promise of the chain.
        """
        if callable(on_progress):
            self.progress(on_progress)

        # Callbacks of an already settled chain are run once the lock is
        # released.
        with callback_batch():
            with self._lock:
                promise = self._promises[-1].then(on_resolved, on_rejected)
                self._promises.append(promise)
        return promise

    def done(self, *handlers):
        for handler in _flatten(handlers):
            self.then(handler)
        return self

    def fail(self, *handlers):
        for handler in _flatten(handlers):
            self.then(None, handler)
        return self

    def always(self, *handlers):
        for handler in _flatten(handlers):
            self.then(handler, handler)
        return self

    def progress(self, *handlers):
        handlers = list(_flatten(handlers))
        with self._lock:
            self._progress_handlers.extend(handlers)
        return self

    def resolve(self, *values):
        self._resolve(_pack(values))
        return self

    def reject(self, *values):
        self._reject(_pack(values))
        return self

    def notify(self, *values):
        """Call all progress handlers, in order, with `values` as arguments."""
        with self._lock:
            handlers = list(self._progress_handlers)
        for handler in handlers:
            handler(*values)
        return self

    def __repr__(self):
        return '<DeferredPromise %s, %s link(s)>' % (self._status.value,
                                                     len(self._promises))
