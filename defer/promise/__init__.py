# -*- coding: utf-8 -*-

from .promise import Promise, TimeoutError, callback_batch

__all__ = ['Promise', 'TimeoutError', 'callback_batch']
