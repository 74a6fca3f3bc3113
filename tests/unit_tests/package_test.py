# -*- coding: utf-8 -*-

import defer
from defer import actions
from defer.deferred_promise import DeferredPromise
from defer.util import has_method, is_thenable


class TestPackage(object):

    def test_exports(self):
        assert defer.DeferredPromise is DeferredPromise
        assert defer.actions is actions
        assert defer.schedule_resolve is actions.schedule_resolve
        assert defer.__version__

    def test_util(self):
        df = DeferredPromise()
        assert has_method(df, 'notify')
        assert not has_method(df, 'notify_with')
        assert is_thenable(df)
        assert is_thenable(df.promise())
        assert not is_thenable(42)
