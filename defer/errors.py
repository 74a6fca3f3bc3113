# -*- coding: utf-8 -*-


class InvalidArgument(TypeError, ValueError):
    """An argument given to a scheduling function is not acceptable.

    It's raised immediately by the call receiving the argument, never from
    inside a timer thread. Nothing has been scheduled when it's raised.
    """
    pass


class NothingToCancel(UserWarning):
    """A Registration has been cancelled while it wasn't running.

    This is a diagnostic, emitted with ``warnings.warn()``: the call to
    ``cancel()`` returns normally.
    """
    pass
