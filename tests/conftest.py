# -*- coding: utf-8 -*-

import pytest


def pytest_addoption(parser):
    parser.addoption('--slowtest', action='store_true', default=False,
                     help='run the slow tests (timing of repeated events)')


def pytest_configure(config):
    config.addinivalue_line('markers', 'slow: slow test, run with --slowtest')


def pytest_collection_modifyitems(config, items):
    if config.getoption('slowtest'):
        return
    skip_slow = pytest.mark.skip(reason='slow test')
    for item in items:
        if 'slow' in item.keywords:
            item.add_marker(skip_slow)
