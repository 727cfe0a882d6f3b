"""
File endpoints
"""
from smarttrack.core.config import settings


def _upload(client, headers, name='report.pdf', content=b'%PDF-1.4 test', **form):
    return client.post(
        '/api/files',
        headers=headers,
        files={'file': (name, content, 'application/pdf')},
        data=form,
    )


def test_list_files_with_joins(client, auth_headers):
    response = client.get('/api/files', headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data['total'] == 2
    first = next(f for f in data['files'] if f['id'] == '1')
    assert first['task']['title'] == 'Prepare Annual Quality Report'
    assert first['uploaded_user']['name'] == 'Dr. Smith'
    assert first['size_label'] == '1.95 MB'


def test_list_files_filters(client, auth_headers):
    by_task = client.get('/api/files', headers=auth_headers, params={'task_id': '2'}).json()
    by_user = client.get('/api/files', headers=auth_headers, params={'user_id': '3'}).json()

    assert [f['id'] for f in by_task['files']] == ['2']
    assert [f['id'] for f in by_user['files']] == ['1']


def test_upload_records_metadata_for_current_user(client, staff_headers):
    response = _upload(client, staff_headers, task_id='1', title='Draft', category='report')

    assert response.status_code == 201
    uploaded = response.json()
    assert uploaded['uploaded_by'] == '3'
    assert uploaded['task_id'] == '1'
    assert uploaded['file_size'] == len(b'%PDF-1.4 test')
    assert uploaded['file_type'] == 'application/pdf'
    assert uploaded['upload_title'] == 'Draft'
    assert uploaded['status'] == 'uploaded'
    assert uploaded['file_url'].startswith('/placeholder.svg')
    assert uploaded['task']['id'] == '1'

    files = client.get('/api/files', headers=staff_headers, params={'task_id': '1'}).json()
    assert files['files'][0]['id'] == uploaded['id']


def test_upload_rejects_disallowed_extension(client, auth_headers):
    response = _upload(client, auth_headers, name='script.exe')

    assert response.status_code == 400


def test_upload_rejects_oversized_file(client, auth_headers, monkeypatch):
    monkeypatch.setattr(settings, 'MAX_UPLOAD_SIZE', 4)

    response = _upload(client, auth_headers, content=b'12345')

    assert response.status_code == 413


def test_delete_file_is_idempotent(client, auth_headers):
    assert client.delete('/api/files/2', headers=auth_headers).status_code == 204
    assert client.delete('/api/files/2', headers=auth_headers).status_code == 204

    remaining = client.get('/api/files', headers=auth_headers).json()
    assert [f['id'] for f in remaining['files']] == ['1']


def test_file_task_join_drops_after_task_delete(client, auth_headers):
    client.delete('/api/tasks/1', headers=auth_headers)

    files = client.get('/api/files', headers=auth_headers, params={'task_id': '1'}).json()

    assert files['total'] == 1
    assert files['files'][0]['task'] is None
