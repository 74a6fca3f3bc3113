# -*- coding: utf-8 -*-

import pytest

from defer.fake import FakeDeferred, Notice
from defer.status import Status
from defer.util import is_deferred


class TestNotice(object):

    def test_notice(self):
        notice = Notice([1, 2], 'ctx')
        assert notice.data == (1, 2)
        assert notice.context == 'ctx'
        assert notice.time > 0

    def test_data_must_be_a_sequence(self):
        with pytest.raises(TypeError):
            Notice('not a list')


class TestFakeDeferred(object):

    def test_when_finished_must_be_callable(self):
        with pytest.raises(TypeError):
            FakeDeferred(None)

    def test_is_deferred(self):
        assert is_deferred(FakeDeferred(lambda *args: None))
        assert not is_deferred(object())

    def test_resolve(self):
        finished = []
        df = FakeDeferred(lambda *args: finished.append(args))
        assert df.status is Status.PENDING
        assert df.finished is None

        df.resolve('a', 'b')

        assert finished == [('a', 'b')]
        assert df.status is Status.RESOLVED
        assert df.data == ('a', 'b')
        assert df.finished >= df.started

    def test_reject_with(self):
        finished = []
        df = FakeDeferred(lambda *args: finished.append(args))
        df.reject_with('ctx', 'error')

        assert finished == [('error',)]
        assert df.status is Status.REJECTED
        assert df.context == 'ctx'

    def test_resolve_with(self):
        df = FakeDeferred(lambda *args: None)
        df.resolve_with('ctx')
        assert df.status is Status.RESOLVED
        assert df.context == 'ctx'
        assert df.data == ()

    def test_notify_to_callable(self):
        notified = []
        df = FakeDeferred(lambda *args: None, lambda *args: notified.append(args))
        df.notify(1, 2)
        df.notify_with('ignored', 3)
        assert notified == [(1, 2), (3,)]

    def test_notify_to_list(self):
        notices = []
        df = FakeDeferred(lambda *args: None, notices)
        df.notify('a')
        df.notify_with('ctx', 'b')

        assert [n.data for n in notices] == [('a',), ('b',)]
        assert notices[0].context is df
        assert notices[1].context == 'ctx'

    def test_notify_without_listener(self):
        df = FakeDeferred(lambda *args: None)
        df.notify('nothing happens')
        assert df.status is Status.PENDING
