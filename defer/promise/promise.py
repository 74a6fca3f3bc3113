# -*- coding: utf-8 -*-

from collections import deque
from contextlib import contextmanager
import logging
from threading import Condition, local
from ..status import Status
from ..util import is_thenable

_logger = logging.getLogger(__name__)

# Callbacks waiting to be executed by the current thread.
_pending = local()


@contextmanager
def callback_batch():
    """Delay the callbacks of the Promises settled inside the block.

    The outermost block of a thread executes the callbacks when it exits,
    in the order they were queued. A callback settling another Promise
    queues the callbacks of that Promise after the current ones, so long
    chains of Promises never grow the stack.

    Yields:
        deque: the queue of (callback, value, is_errback) of the thread.
    """
    queue = getattr(_pending, 'queue', None)
    if queue is not None:
        yield queue
        return

    queue = deque()
    _pending.queue = queue
    try:
        yield queue
        while queue:
            callback, value, is_errback = queue.popleft()
            Promise._exec_callback(callback, value, is_errback)
    finally:
        _pending.queue = None


def _run_callbacks(callbacks, value, is_errback=False):
    with callback_batch() as queue:
        queue.extend((callback, value, is_errback) for callback in callbacks)


class TimeoutError(Exception):
    """An operation could not be executed within the time allowed."""
    pass


class Promise(object):
    """Native two-state future: it settles once, as resolved or rejected.

    A Promise contains a value not yet known when the Promise is created. It
    allows to set callbacks who will be called as soon as the result is
    known. Callbacks are executed synchronously, in the thread who settles
    the Promise, in the order they have been added.

    There is no progress channel: see ``DeferredPromise`` for that.

    All calls to the methods are thread-safe.
    """

    def __init__(self, executor, _name=None, _previous=None):
        """Constructor of the Promise.

        Generate the two settle functions for the executor, then call the
        `executor`. It means the executor will be fully executed before the
        constructor returns.
        If the executor raises an exception, it's caught and the Promise is
        rejected with this exception.

        Args:
            executor (callable): Takes 2 callable arguments:
                The first one, `on_resolved()` should be called when the
                Promise is resolved and accepts the result's value as its only
                argument.
                The second, `on_rejected()`, should be called when an error
                occurs, with the rejection reason as argument.
            _name (str): if set, name used when converted to text.
        """

        self._state = Status.PENDING
        self._result = None
        self._error = None
        self._condition = Condition()
        self._name = _name or getattr(executor, '__name__', '???')
        self._previous = _previous

        self._callbacks = []
        self._errbacks = []

        def on_resolved(result=None):
            with self._condition:
                if self._state is not Status.PENDING:
                    _logger.warning('Try to resolve Promise %r already '
                                    'settled. New result will be ignored: %r',
                                    self, result)
                    return
                self._result = result
                self._state = Status.RESOLVED

                self._condition.notify_all()

                callbacks = self._callbacks
                # Free the references
                self._callbacks = None
                self._errbacks = None

            _run_callbacks(callbacks, result)

        def on_rejected(error=None):
            with self._condition:
                if self._state is not Status.PENDING:
                    _logger.warning('Try to reject Promise %r already '
                                    'settled. New error will be ignored: %r',
                                    self, error)
                    return
                self._error = error
                self._state = Status.REJECTED

                self._condition.notify_all()

                errbacks = self._errbacks
                self._callbacks = None
                self._errbacks = None

            _run_callbacks(errbacks, error, is_errback=True)

        try:
            executor(on_resolved, on_rejected)
        except Exception as error:
            on_rejected(error)

    @property
    def state(self):
        """Status: current state of the promise."""
        with self._condition:
            return self._state

    def result(self, timeout=None):
        """Wait for the result and returns it as soon as it's available.

        Args:
            timeout (float, optional): if set, maximum time to wait the
                promise to be resolved, in seconds. By default, it can wait
                indefinitely.
        Returns:
            *: value encapsulated, defined by the operation.
        Raises:
            TimeoutError: if the promise is not settled within the delay.
            *: If the promise is rejected with an exception, it's raised.
            TypeError: If the promise is rejected with a non-exception value.
        """
        with self._condition:
            self._condition.wait_for(
                lambda: self._state is not Status.PENDING, timeout)

            if self._state is Status.PENDING:
                raise TimeoutError()
            elif self._state is Status.REJECTED:
                if isinstance(self._error, BaseException):
                    raise self._error
                raise TypeError('Promise rejected with non-exception value: '
                                '%r' % (self._error,))
            return self._result

    def exception(self, timeout=None):
        """Wait for the promise rejection and returns it's reason.

        Args:
            timeout (float, optional): if set, maximum time to wait the
                promise to be settled, in seconds.
        Returns:
            the reason of the rejection, or None if the promise is resolved.
        Raises:
            TimeoutError: if the promise is not settled within the delay.
        """
        with self._condition:
            self._condition.wait_for(
                lambda: self._state is not Status.PENDING, timeout)

            if self._state is Status.PENDING:
                raise TimeoutError()
            return self._error

    def then(self, on_resolved=None, on_rejected=None):
        """Create a new promise from callbacks called when this one is settled.

        If the promise is resolved, the `on_resolved` callback will be
        called. Otherwise (the promise has been rejected), the `on_rejected`
        callback is called.
        In any case, the callback will define the state of the returned
        Promise. If the callback raises an exception, the new Promise is
        rejected. The callback can returns:
        - A value: the new promise will be resolved with this value.
        - Another Promise, or any object with a `then` method: when settled,
            will transfer its status (state and result/error) to the Promise
            returned by this method.

        If a callback is not defined, the state of the "self" promise is
        transferred to the new promise (the state and the value/error).

        Args:
            on_resolved (callable, optional): This callback will receive the
                result of the original promise as argument.
            on_rejected (callable, optional): This callback will receive the
                reason of the rejection as argument.
        Returns:
            Promise<*>: new promise depending of self.
        """

        def chained_executor(resolved, rejected):

            def forward(handler, value, default):
                if handler is None:
                    return default(value)
                try:
                    new_result = handler(value)
                except Exception as error:
                    return rejected(error)

                if is_thenable(new_result):
                    new_result.then(resolved, rejected)
                else:
                    resolved(new_result)

            self._add_callback(lambda value: forward(on_resolved, value,
                                                     resolved))
            self._add_errback(lambda error: forward(on_rejected, error,
                                                    rejected))

        if not on_rejected:
            name = '%s' % getattr(on_resolved, '__name__', '???')
        elif not on_resolved:
            name = '<None, %s>' % getattr(on_rejected, '__name__', '???')
        else:
            name = '<%s, %s>' % (getattr(on_resolved, '__name__', '???'),
                                 getattr(on_rejected, '__name__', '???'))
        return Promise(chained_executor, _name=name, _previous=self)

    def catch(self, on_rejected):
        """Create a new promise with a callback called when an error occurs.

        Alias of `self.then(None, on_rejected)`
        """
        return self.then(None, on_rejected)

    def __repr__(self):
        return 'Promise(%s)' % self._inner_print()

    def _inner_print(self):
        states = {Status.PENDING: 'P',
                  Status.RESOLVED: 'F',
                  Status.REJECTED: 'R'}

        links = []
        promise = self
        while promise is not None:
            links.append('%s %s' % (promise._name, states[promise.state]))
            promise = promise._previous
        return ' -> '.join(reversed(links))

    @classmethod
    def resolve(cls, value=None):
        """Create a promise who resolves the selected value.

        Args:
            value: result of the promise. If it's a thenable, it's returned as
                is.
        Returns:
            Promise: new Promise already resolved.
        """
        if is_thenable(value):
            return value
        return cls(lambda ok, error: ok(value), _name='RESOLVE')

    @classmethod
    def reject(cls, reason=None):
        """Create a Promise rejected for the reason specified.

        Returns:
            Promise: new Promise already rejected.
        """
        return cls(lambda ok, error: error(reason), _name='REJECT')

    @staticmethod
    def _exec_callback(callback, value, is_errback=False):
        try:
            callback(value)
        except Exception:
            if is_errback:
                _logger.exception("Promise errback raise an exception!")
            else:
                _logger.exception("Promise callback raise an exception!")

    def _add_callback(self, callback):
        with self._condition:
            if self._state is Status.PENDING:
                self._callbacks.append(callback)
                return
            if self._state is not Status.RESOLVED:
                return
            result = self._result

        _run_callbacks([callback], result)

    def _add_errback(self, errback):
        with self._condition:
            if self._state is Status.PENDING:
                self._errbacks.append(errback)
                return
            if self._state is not Status.REJECTED:
                return
            error = self._error

        _run_callbacks([errback], error, is_errback=True)
