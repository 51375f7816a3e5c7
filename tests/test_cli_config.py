"""Tests for CLI configuration module."""

import json
import pytest
from pathlib import Path
from cli.config import Config
from common.constants import DEFAULT_CHUNK_SIZE_BYTES


@pytest.fixture(autouse=True)
def default_server(monkeypatch):
    """Pin server defaults regardless of the environment."""
    monkeypatch.delenv('FILESTORE_HOST', raising=False)
    monkeypatch.delenv('FILESTORE_PORT', raising=False)


def test_config_creates_default_file(tmp_path):
    """Test that config file is created with defaults if missing."""
    config_path = tmp_path / '.filestore' / 'config.json'
    config = Config(config_path)

    assert config_path.exists()

    assert config.data['server_host'] == 'localhost'
    assert config.data['server_port'] == 8000
    assert config.data['timeout'] == 30
    assert config.data['max_retries'] == 3
    assert config.data['retry_backoff_multiplier'] == 2
    assert config.data['chunk_size'] == DEFAULT_CHUNK_SIZE_BYTES
    assert 'identity' not in config.data


def test_config_loads_existing_file(tmp_path):
    """Test loading existing config file."""
    config_path = tmp_path / '.filestore' / 'config.json'
    config_path.parent.mkdir(parents=True)

    existing_data = {
        'identity': 'alice',
        'server_host': 'example.com',
        'server_port': 9000,
    }
    with open(config_path, 'w') as f:
        json.dump(existing_data, f)

    config = Config(config_path)

    assert config.get_identity() == 'alice'
    assert config.data['server_host'] == 'example.com'
    assert config.data['server_port'] == 9000

    assert config.data['timeout'] == 30
    assert config.data['max_retries'] == 3


def test_config_set_and_clear_identity(temp_config):
    """Test saving, retrieving and clearing the identity."""
    assert temp_config.get_identity() is None

    temp_config.set_identity('alice')
    assert temp_config.get_identity() == 'alice'

    with open(temp_config.config_path, 'r') as f:
        data = json.load(f)
    assert data['identity'] == 'alice'

    temp_config.set_identity(None)
    assert temp_config.get_identity() is None

    with open(temp_config.config_path, 'r') as f:
        data = json.load(f)
    assert 'identity' not in data


def test_config_handles_corrupted_file(tmp_path):
    """Test recovery from corrupted config file."""
    config_path = tmp_path / '.filestore' / 'config.json'
    config_path.parent.mkdir(parents=True)

    with open(config_path, 'w') as f:
        f.write('{ invalid json content')

    config = Config(config_path)
    assert config.data['server_host'] == 'localhost'
    assert config.data['server_port'] == 8000

    backup_path = config_path.with_suffix('.json.bak')
    assert backup_path.exists()


def test_config_get_base_url(temp_config):
    """Test base URL construction."""
    assert temp_config.get_base_url() == 'http://localhost:8000'

    temp_config.data['server_host'] = 'example.com'
    temp_config.data['server_port'] = 9000
    assert temp_config.get_base_url() == 'http://example.com:9000'


def test_config_get_timeout_and_chunk_size(temp_config):
    assert temp_config.get_timeout() == 30
    assert temp_config.get_chunk_size() == DEFAULT_CHUNK_SIZE_BYTES

    temp_config.data['timeout'] = 60
    temp_config.data['chunk_size'] = 4
    assert temp_config.get_timeout() == 60
    assert temp_config.get_chunk_size() == 4


def test_config_get_retry_config(temp_config):
    """Test retry configuration retrieval."""
    retry_config = temp_config.get_retry_config()

    assert retry_config['max_retries'] == 3
    assert retry_config['retry_backoff_multiplier'] == 2

    temp_config.data['max_retries'] = 5
    temp_config.data['retry_backoff_multiplier'] = 3

    retry_config = temp_config.get_retry_config()
    assert retry_config['max_retries'] == 5
    assert retry_config['retry_backoff_multiplier'] == 3


def test_config_directory_created_if_missing(tmp_path):
    """Test that config directory is created if it doesn't exist."""
    config_path = tmp_path / 'nested' / 'deep' / '.filestore' / 'config.json'

    assert not config_path.parent.exists()

    config = Config(config_path)
    assert config_path.parent.exists()
    assert config_path.exists()


def test_config_defaults_follow_environment(tmp_path, monkeypatch):
    monkeypatch.setenv('FILESTORE_HOST', 'store.internal')
    monkeypatch.setenv('FILESTORE_PORT', '9100')

    config = Config(tmp_path / '.filestore' / 'config.json')

    assert config.get_base_url() == 'http://store.internal:9100'


def test_config_invalid_values_fall_back(tmp_path):
    config_path = tmp_path / '.filestore' / 'config.json'
    config_path.parent.mkdir(parents=True)
    config_path.write_text(json.dumps({
        'chunk_size': 0,
        'timeout': 'soon',
        'max_retries': -1,
        'identity': 'alice',
    }))

    config = Config(config_path)

    assert config.get_chunk_size() == DEFAULT_CHUNK_SIZE_BYTES
    assert config.get_timeout() == 30
    assert config.get_retry_config()['max_retries'] == 3
    assert config.get_identity() == 'alice'


def test_config_non_object_file_is_backed_up(tmp_path):
    config_path = tmp_path / '.filestore' / 'config.json'
    config_path.parent.mkdir(parents=True)
    config_path.write_text('[1, 2, 3]')

    config = Config(config_path)

    assert config.get_identity() is None
    assert config_path.with_suffix('.json.bak').exists()


def test_config_set_server(temp_config):
    temp_config.set_server('example.com', 9000)

    reloaded = Config(temp_config.config_path)
    assert reloaded.get_base_url() == 'http://example.com:9000'


def test_config_failed_write_leaves_no_temp_file(temp_config, monkeypatch):
    def broken_dump(*args, **kwargs):
        raise TypeError("not serializable")

    monkeypatch.setattr('cli.config.json.dump', broken_dump)

    with pytest.raises(TypeError):
        temp_config.set_identity('alice')

    assert list(temp_config.config_path.parent.glob('*.tmp')) == []
    monkeypatch.undo()
    assert Config(temp_config.config_path).get_identity() is None


def test_config_failed_replace_is_logged(temp_config, monkeypatch):
    def no_space(*args, **kwargs):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr('cli.config.os.replace', no_space)

    temp_config.set_identity('alice')

    assert temp_config.get_identity() == 'alice'
    assert list(temp_config.config_path.parent.glob('*.tmp')) == []
