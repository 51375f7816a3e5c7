"""Shared pytest fixtures for all tests."""

import pytest
from pathlib import Path
from cli.config import Config
from filestore.owner_directory import OwnerDirectory
from filestore.service_locator import set_owner_directory, set_snapshot_store
from filestore.snapshot import SnapshotStore


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to temporary .filestore directory
    """
    config_dir = tmp_path / '.filestore'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.

    Args:
        temp_config_dir: Temporary config directory fixture

    Returns:
        Config instance with temp config file
    """
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def sample_file(tmp_path):
    """
    Create a sample file for testing file uploads.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to sample text file
    """
    file_path = tmp_path / 'test.txt'
    file_path.write_text('Sample content for testing')
    return file_path


@pytest.fixture
def directory():
    """Fresh owner directory installed as the process-wide instance."""
    directory = OwnerDirectory()
    set_owner_directory(directory)
    return directory


@pytest.fixture
def snapshot_store(tmp_path):
    """Snapshot store writing under tmp_path, installed as the process-wide instance."""
    store = SnapshotStore(tmp_path / 'data' / 'snapshot.json')
    set_snapshot_store(store)
    return store
