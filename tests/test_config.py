import importlib

import dslink
import pytest


@pytest.fixture
def reload_config(monkeypatch):

    yield lambda: importlib.reload(dslink.config)

    # Restore the defaults for everyone else.
    monkeypatch.undo()
    importlib.reload(dslink.config)


def test_defaults(monkeypatch, reload_config):

    for name in ('DSLINK_WAIT_TIMEOUT', 'DSLINK_IDLE_TIMEOUT', 'DSLINK_ID_MAX'):
        monkeypatch.delenv(name, raising=False)

    config = reload_config()

    assert config.wait_timeout == 60.0
    assert config.idle_timeout == 300.0
    assert config.id_max == 0xFFFFFFFF


def test_environment(monkeypatch, reload_config):

    monkeypatch.setenv('DSLINK_WAIT_TIMEOUT', '2.5')
    monkeypatch.setenv('DSLINK_ID_MAX', '0x100')

    config = reload_config()

    assert config.wait_timeout == 2.5
    assert config.id_max == 256


def test_invalid_environment(monkeypatch, reload_config):

    monkeypatch.setenv('DSLINK_WAIT_TIMEOUT', 'soon')

    with pytest.raises(ValueError):
        reload_config()

    monkeypatch.setenv('DSLINK_WAIT_TIMEOUT', '1')
    monkeypatch.setenv('DSLINK_ID_MAX', '0')

    with pytest.raises(ValueError):
        reload_config()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
