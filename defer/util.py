# -*- coding: utf-8 -*-


def has_method(value, name):
    """Check if an object has a callable attribute named `name`.

    Args:
        value: object to test.
        name (str): name of the attribute.
    Returns:
        boolean: True if the attribute exists and is callable.
    """
    return callable(getattr(value, name, None))


def is_deferred(value):
    """Check if an object can be settled like a Deferred.

    Only `resolve()` and `reject()` are required. The methods `notify()`,
    `resolve_with()`, `reject_with()` and `notify_with()` are optional.

    Returns:
        boolean: True if both `resolve` and `reject` are callable.
    """
    return has_method(value, 'resolve') and has_method(value, 'reject')


def is_thenable(value):
    """Check if an object can be chained, like a Promise, or is a "result".

    The promise module uses this function to differentiate "chainable" objects
    and direct return values, when using a callback who can returns both.

    Returns:
        boolean: True if the value has an attribute 'then' who is callable.
            False if not.
    """
    return has_method(value, 'then')
