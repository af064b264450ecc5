import io
import os


PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x00' * 64


def _upload(client, headers, data=PNG_BYTES, filename='shot.png', content_type='image/png'):
    return client.post(
        '/upload',
        data={'image': (io.BytesIO(data), filename, content_type)},
        headers=headers,
        content_type='multipart/form-data'
    )


def test_upload_stores_and_serves_image(app, client, make_user, auth_headers):
    user_id = make_user('alice')
    headers = auth_headers(user_id)

    response = _upload(client, headers)
    assert response.status_code == 201
    data = response.get_json()['data']
    assert data['filename'].startswith(f'code_{user_id}_')
    assert data['filename'].endswith('.png')
    assert data['url'] == f"/uploads/{data['filename']}"
    assert os.path.exists(os.path.join(app.config['UPLOAD_FOLDER'], data['filename']))

    served = client.get(data['url'])
    assert served.status_code == 200
    assert served.data == PNG_BYTES
    served.close()


def test_same_bytes_same_reference(client, make_user, auth_headers):
    headers = auth_headers(make_user('alice'))

    first = _upload(client, headers).get_json()['data']
    second = _upload(client, headers, filename='renamed.png').get_json()['data']
    assert first['url'] == second['url']


def test_upload_rejections(app, client, make_user, auth_headers):
    headers = auth_headers(make_user('alice'))

    response = client.post('/upload', data={}, headers=headers, content_type='multipart/form-data')
    assert response.status_code == 400

    response = _upload(client, headers, filename='notes.txt', content_type='text/plain')
    assert response.status_code == 400

    response = _upload(client, headers, filename='shot.gif', content_type='image/png')
    assert response.status_code == 400

    too_big = b'\x00' * (app.config['MAX_UPLOAD_BYTES'] + 1)
    response = _upload(client, headers, data=too_big)
    assert response.status_code == 400
    assert 'less than' in response.get_json()['error']['message']


def test_upload_requires_auth(client):
    assert _upload(client, {}).status_code == 401
