# -*- coding: utf-8 -*-

from enum import Enum


class Status(Enum):
    """Settlement state of a deferred object."""

    PENDING = 'pending'
    RESOLVED = 'resolved'
    REJECTED = 'rejected'
