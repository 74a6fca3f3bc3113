# -*- coding: utf-8 -*-

import configparser
import pytest

from defer.common import config


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Use a fresh parser, and a config file in a temporary folder."""
    parser = configparser.ConfigParser()
    parser.add_section('config')
    path = tmp_path / 'defer.ini'

    monkeypatch.setattr(config, '_config_parser', parser)
    monkeypatch.setattr(config, '_get_config_file_path', lambda: str(path))
    return path


class TestConfig(object):

    def test_defaults_before_load(self, config_file):
        assert config.get('debug_mode') is False
        assert config.get('log_levels') == {}
        assert config.get('daemon_timers') is True
        assert config.get('timer_name') == 'Deferred'

    def test_unknown_key(self, config_file):
        with pytest.raises(KeyError):
            config.get('foo')
        with pytest.raises(KeyError):
            config.set('foo', 1)

    def test_load_missing_file(self, config_file, caplog):
        config.load()
        assert 'Unable to load config file' in caplog.text

    def test_load_file(self, config_file):
        config_file.write_text('[config]\n'
                               'debug_mode = yes\n'
                               'log_levels = defer=debug;defer.actions=20\n'
                               'timer_name = Worker\n')
        config.load()

        assert config.get('debug_mode') is True
        assert config.get('log_levels') == {'defer': 'debug',
                                            'defer.actions': '20'}
        assert config.get('timer_name') == 'Worker'

    def test_invalid_bool(self, config_file):
        config_file.write_text('[config]\ndaemon_timers = maybe\n')
        config.load()
        assert config.get('daemon_timers') is True

    def test_invalid_dict_pair_is_ignored(self, config_file):
        config_file.write_text('[config]\nlog_levels = defer=info;oops\n')
        config.load()
        assert config.get('log_levels') == {'defer': 'info'}

    def test_dict_pairs_on_several_lines(self, config_file):
        config_file.write_text('[config]\n'
                               'log_levels =\n'
                               '    defer = warning\n'
                               '    =nameless;defer.actions=10;\n')
        config.load()
        assert config.get('log_levels') == {'defer': 'warning',
                                            'defer.actions': '10'}

    def test_set_writes_the_file(self, config_file):
        config.set('daemon_timers', False)
        config.set('log_levels', {'defer': 'warning'})

        assert config.get('daemon_timers') is False
        assert config.get('log_levels') == {'defer': 'warning'}
        content = config_file.read_text()
        assert 'daemon_timers = False' in content
        assert 'log_levels = defer=warning' in content
