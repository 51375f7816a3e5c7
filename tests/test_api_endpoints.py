"""Tests for file store API endpoints."""

import base64
from urllib.parse import quote

import pytest
from fastapi.testclient import TestClient
from filestore import config
from cli.filestore_client import FileStoreClient
from filestore.main import app
from filestore.owner_directory import OwnerDirectory
from filestore.service_locator import set_owner_directory


ALICE = {'Authorization': 'Bearer alice'}
BOB = {'Authorization': 'Bearer bob'}


@pytest.fixture
def client(directory, snapshot_store):
    """Create FastAPI test client over a fresh owner directory."""
    return TestClient(app)


def upload(client, name, data, index, file_type='text/plain', project_id=None, headers=ALICE):
    form = {'index': str(index), 'file_type': file_type}
    if project_id is not None:
        form['project_id'] = project_id
    return client.post(
        f'/files/{quote(name, safe="")}/chunks',
        files={'chunk': (name, data)},
        data=form,
        headers=headers,
    )


def test_root_endpoint(client):
    response = client.get('/')
    assert response.status_code == 200
    assert response.json()['status'] == 'running'


def test_health_endpoint(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.json() == {'status': 'healthy', 'service': 'filestore'}


def test_ready_endpoint(client):
    upload(client, 'a.txt', b'AB', 0)

    response = client.get('/ready')

    assert response.status_code == 200
    data = response.json()
    assert data['ready'] is True
    assert data['owners'] == 1
    assert data['files'] == 1


def test_request_id_echoed(client):
    response = client.get('/health', headers={'X-Request-ID': 'req-123'})
    assert response.headers['X-Request-ID'] == 'req-123'


def test_upload_chunk_scenario(client):
    """Upload, append, associate and delete a file over HTTP."""
    assert upload(client, 'a.txt', b'AB', 0).status_code == 204
    assert client.get('/files/a.txt/chunks/count', headers=ALICE).json()['chunk_count'] == 1
    assert client.get('/storage/usage', headers=ALICE).json() == {'total_bytes': 2}

    assert upload(client, 'a.txt', b'CD', 1).status_code == 204
    assert client.get('/storage/usage', headers=ALICE).json() == {'total_bytes': 4}
    chunk = client.get('/files/a.txt/chunks/1', headers=ALICE).json()
    assert base64.b64decode(chunk['data']) == b'CD'

    response = client.put('/files/a.txt/project', json={'project_id': 'Proj1'}, headers=ALICE)
    assert response.status_code == 200
    assert response.json()['associated'] is True
    files = client.get('/projects/Proj1/files', headers=ALICE).json()['files']
    assert [f['name'] for f in files] == ['a.txt']

    response = client.delete('/files/a.txt', headers=ALICE)
    assert response.json() == {'name': 'a.txt', 'deleted': True}
    assert client.get('/storage/usage', headers=ALICE).json() == {'total_bytes': 0}
    assert client.get('/files/a.txt/exists', headers=ALICE).json()['exists'] is False


def test_delete_twice(client):
    upload(client, 'a.txt', b'AB', 0)

    assert client.delete('/files/a.txt', headers=ALICE).json()['deleted'] is True
    assert client.delete('/files/a.txt', headers=ALICE).json()['deleted'] is False


def test_list_files(client):
    upload(client, 'a.txt', b'AB', 0, project_id='P1')
    upload(client, 'b.png', b'12345', 0, file_type='image/png')

    files = {f['name']: f for f in client.get('/files', headers=ALICE).json()['files']}

    assert files['a.txt']['size'] == 2
    assert files['a.txt']['project_id'] == 'P1'
    assert files['b.png']['file_type'] == 'image/png'
    assert files['b.png']['project_id'] is None
    assert files['b.png']['uploaded_at'] > 0


def test_owner_isolation(client):
    upload(client, 'a.txt', b'AB', 0, project_id='P1', headers=ALICE)

    assert client.get('/files', headers=BOB).json() == {'files': []}
    assert client.get('/files/a.txt/exists', headers=BOB).json()['exists'] is False
    assert client.get('/projects/P1/files', headers=BOB).json()['files'] == []
    assert client.get('/files/a.txt/download', headers=BOB).status_code == 404


def test_absent_values_are_null(client):
    assert client.get('/files/ghost/metadata', headers=ALICE).json() == {'file': None}
    assert client.get('/files/ghost/type', headers=ALICE).json()['file_type'] is None
    assert client.get('/files/ghost/chunks/0', headers=ALICE).json()['data'] is None
    assert client.get('/files/ghost/chunks/count', headers=ALICE).json()['chunk_count'] == 0

    response = client.put('/files/ghost/project', json={'project_id': 'P1'}, headers=ALICE)
    assert response.json()['associated'] is False


def test_metadata_record(client):
    upload(client, 'a.txt', b'AB', 0)
    upload(client, 'a.txt', b'C', 5, file_type='text/markdown')

    file = client.get('/files/a.txt/metadata', headers=ALICE).json()['file']

    assert file['name'] == 'a.txt'
    assert file['total_size'] == 3
    assert file['file_type'] == 'text/markdown'
    assert file['project_id'] is None
    assert [(c['index'], c['size']) for c in file['chunks']] == [(0, 2), (5, 1)]
    assert base64.b64decode(file['chunks'][1]['data']) == b'C'


def test_download_reassembles_in_append_order(client):
    upload(client, 'a.txt', b'CD', 1)
    upload(client, 'a.txt', b'AB', 0)

    response = client.get('/files/a.txt/download', headers=ALICE)

    assert response.status_code == 200
    assert response.content == b'CDAB'
    assert response.headers['content-type'].startswith('text/plain')


def test_download_missing_file(client):
    assert client.get('/files/ghost/download', headers=ALICE).status_code == 404


def test_anonymous_caller_can_use_files(client):
    assert upload(client, 'a.txt', b'AB', 0, headers={}).status_code == 204
    assert client.get('/files/a.txt/exists').json()['exists'] is True


def test_renewable_projects_requires_identity(client):
    response = client.get('/projects/renewable')

    assert response.status_code == 401
    assert response.json()['code'] == 'UNAUTHENTICATED'


def test_renewable_projects(client):
    response = client.get('/projects/renewable', headers=ALICE)

    assert response.status_code == 200
    assert response.json()['projects'] == list(config.RENEWABLE_PROJECTS)


def test_invalid_authorization_header(client):
    response = client.get('/files', headers={'Authorization': 'Token abc'})

    assert response.status_code == 401
    assert response.json()['code'] == 'INVALID_AUTHORIZATION'


def test_require_auth_rejects_anonymous(client, monkeypatch):
    monkeypatch.setattr(config, 'REQUIRE_AUTH', True)

    response = client.get('/files')

    assert response.status_code == 401
    assert response.json()['code'] == 'UNAUTHENTICATED'
    assert client.get('/files', headers=ALICE).status_code == 200


def test_quota_exceeded(client, monkeypatch):
    monkeypatch.setattr(config, 'MAX_FILE_BYTES', 3)
    upload(client, 'a.txt', b'AB', 0)

    response = upload(client, 'a.txt', b'CD', 1)

    assert response.status_code == 507
    assert response.json()['code'] == 'QUOTA_EXCEEDED'
    assert client.get('/files/a.txt/chunks/count', headers=ALICE).json()['chunk_count'] == 1


def test_upload_validation(client):
    response = client.post(
        '/files/a.txt/chunks',
        files={'chunk': ('a.txt', b'AB')},
        data={'index': '-1', 'file_type': 'text/plain'},
        headers=ALICE,
    )
    assert response.status_code == 422

    response = client.post(
        '/files/a.txt/chunks',
        files={'chunk': ('a.txt', b'AB')},
        data={'index': '0'},
        headers=ALICE,
    )
    assert response.status_code == 422


def test_associate_requires_project_id(client):
    upload(client, 'a.txt', b'AB', 0)

    response = client.put('/files/a.txt/project', json={'project_id': ''}, headers=ALICE)

    assert response.status_code == 422


def test_name_with_slash_encoded(client):
    assert upload(client, 'dir/a.txt', b'AB', 0).status_code == 204

    assert client.get('/files/dir%2Fa.txt/exists', headers=ALICE).json()['exists'] is True
    assert client.get('/files/dir%2Fa.txt/chunks/count', headers=ALICE).json() == {
        'name': 'dir/a.txt', 'chunk_count': 1
    }
    response = client.get('/files/dir%2Fa.txt/download', headers=ALICE)
    assert response.content == b'AB'
    assert response.headers['content-disposition'] == "attachment; filename*=UTF-8''dir%2Fa.txt"
    assert [f['name'] for f in client.get('/files', headers=ALICE).json()['files']] == ['dir/a.txt']

    response = client.delete('/files/dir%2Fa.txt', headers=ALICE)
    assert response.json() == {'name': 'dir/a.txt', 'deleted': True}


def test_name_with_slash_unencoded(client):
    response = client.post(
        '/files/dir/sub/a.txt/chunks',
        files={'chunk': ('a.txt', b'AB')},
        data={'index': '0', 'file_type': 'text/plain'},
        headers=ALICE,
    )
    assert response.status_code == 204

    file = client.get('/files/dir/sub/a.txt/metadata', headers=ALICE).json()['file']
    assert file['name'] == 'dir/sub/a.txt'
    chunk = client.get('/files/dir/sub/a.txt/chunks/0', headers=ALICE).json()
    assert base64.b64decode(chunk['data']) == b'AB'
    assert client.get('/files/dir/sub/a.txt/type', headers=ALICE).json()['file_type'] == 'text/plain'

    response = client.put('/files/dir/sub/a.txt/project', json={'project_id': 'P1'}, headers=ALICE)
    assert response.json()['associated'] is True


def test_names_with_reserved_characters(client):
    for name in ('a?x', 'report#1.txt', '100%', 'my notes.txt'):
        assert upload(client, name, b'AB', 0).status_code == 204

    names = {f['name'] for f in client.get('/files', headers=ALICE).json()['files']}
    assert names == {'a?x', 'report#1.txt', '100%', 'my notes.txt'}
    assert client.get('/files/100%25/download', headers=ALICE).content == b'AB'


def test_project_id_with_slash(client):
    upload(client, 'a.txt', b'AB', 0, project_id='team/P1')

    files = client.get('/projects/team%2FP1/files', headers=ALICE).json()['files']

    assert [f['name'] for f in files] == ['a.txt']


@pytest.fixture
def cli_client(client, temp_config):
    """FileStoreClient talking to the app in-process."""
    temp_config.set_identity('alice')
    cli = FileStoreClient(temp_config)
    cli.session = client
    return cli


def test_cli_names_are_single_segments(cli_client, client, tmp_path):
    upload(client, 'a', b'AB', 0)
    report = tmp_path / 'report#1.txt'
    report.write_bytes(b'0123456789')

    assert cli_client.upload(str(report)).ok
    assert client.get('/files/report%231.txt/download', headers=ALICE).content == b'0123456789'

    result = cli_client.delete('a?x')

    assert not result.ok
    assert client.get('/files/a/exists', headers=ALICE).json()['exists'] is True

    assert cli_client.delete('report#1.txt').ok
    assert cli_client.chunk_count('a') == 'a: 1 chunk(s)'


def test_state_survives_restart(directory, snapshot_store):
    """Shutdown writes a snapshot that the next startup restores."""
    with TestClient(app) as client:
        upload(client, 'a.txt', b'AB', 0)
        upload(client, 'a.txt', b'CD', 1)
        response = client.put('/files/a.txt/project', json={'project_id': 'P'}, headers=ALICE)
        assert response.json()['associated'] is True

    assert snapshot_store.path.exists()
    set_owner_directory(OwnerDirectory())

    with TestClient(app) as client:
        assert client.get('/files/a.txt/download', headers=ALICE).content == b'ABCD'
        file = client.get('/files/a.txt/metadata', headers=ALICE).json()['file']
        assert file['project_id'] == 'P'
        assert [c['index'] for c in file['chunks']] == [0, 1]
        files = client.get('/projects/P/files', headers=ALICE).json()['files']
        assert [f['name'] for f in files] == ['a.txt']
        assert client.get('/files', headers=BOB).json() == {'files': []}
