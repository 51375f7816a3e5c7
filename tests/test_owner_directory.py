"""Tests for the owner directory."""

import threading

from filestore.owner_directory import OwnerDirectory


def test_resolve_creates_table_once():
    directory = OwnerDirectory()

    first = directory.resolve('alice')
    second = directory.resolve('alice')

    assert first is second
    assert directory.owner_count() == 1


def test_get_does_not_create():
    directory = OwnerDirectory()

    assert directory.get('alice') is None
    assert directory.owner_count() == 0


def test_owners_are_isolated():
    """Files written under one owner are invisible to another."""
    directory = OwnerDirectory()
    directory.resolve('alice').append_chunk('a.txt', b'AB', 0, 'text/plain', project_id='P1')

    bob = directory.resolve('bob')
    assert not bob.exists('a.txt')
    assert bob.list_metadata() == []
    assert bob.list_by_project('P1') == []
    assert bob.storage_usage() == 0
    assert bob.delete('a.txt') is False

    assert directory.resolve('alice').exists('a.txt')


def test_same_name_under_different_owners():
    directory = OwnerDirectory()
    directory.resolve('alice').append_chunk('a.txt', b'alice', 0, 'text/plain')
    directory.resolve('bob').append_chunk('a.txt', b'bob', 0, 'text/plain')

    assert directory.resolve('alice').read_file('a.txt') == b'alice'
    assert directory.resolve('bob').read_file('a.txt') == b'bob'
    assert directory.file_count() == 2


def test_concurrent_first_resolve_shares_one_table():
    directory = OwnerDirectory()
    barrier = threading.Barrier(16)
    results = []
    results_lock = threading.Lock()

    def worker():
        barrier.wait()
        table = directory.resolve('carol')
        with results_lock:
            results.append(table)

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 16
    assert all(table is results[0] for table in results)
    assert directory.identities() == ['carol']


def test_concurrent_appends_are_all_kept():
    directory = OwnerDirectory()

    def worker(worker_id):
        table = directory.resolve('dave')
        for i in range(50):
            table.append_chunk('shared.bin', b'x', worker_id * 100 + i, 'application/octet-stream')

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    table = directory.resolve('dave')
    assert table.chunk_count('shared.bin') == 400
    assert table.file_size('shared.bin') == 400
