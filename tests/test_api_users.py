from datetime import datetime, timedelta, timezone

import jwt

from middleware.auth import JWT_AUDIENCE, JWT_ISSUER
from utils.errors import ValidationError


def test_service_info_and_health(client):
    assert client.get('/').get_json()['message'] == 'YourCode API is running'
    assert client.get('/health').get_json() == {'status': 'ok'}


def test_register_login_verify(client):
    response = client.post('/auth/register', json={
        'username': 'alice',
        'email': 'Alice@Example.com',
        'password': 'hunter22'
    })
    assert response.status_code == 201
    data = response.get_json()['data']
    assert data['user']['username'] == 'alice'
    assert data['user']['email'] == 'alice@example.com'
    assert 'password_hash' not in data['user']

    for identifier in ('alice', 'alice@example.com'):
        response = client.post('/auth/login', json={'username': identifier, 'password': 'hunter22'})
        assert response.status_code == 200
        token = response.get_json()['data']['token']

    response = client.get('/auth/verify', headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 200
    assert response.get_json()['data']['user']['username'] == 'alice'


def test_register_missing_fields_and_duplicates(client, make_user):
    make_user('alice')

    response = client.post('/auth/register', json={'username': 'bob'})
    assert response.status_code == 400

    response = client.post('/auth/register', json={
        'username': 'alice', 'email': 'other@example.com', 'password': 'x'
    })
    assert response.status_code == 409

    response = client.post('/auth/register', json={
        'username': 'alice2', 'email': 'alice@example.com', 'password': 'x'
    })
    assert response.status_code == 409


def test_login_with_bad_credentials(client, make_user):
    make_user('alice', password='right')

    response = client.post('/auth/login', json={'username': 'alice', 'password': 'wrong'})
    assert response.status_code == 401

    response = client.post('/auth/login', json={'username': 'nobody', 'password': 'right'})
    assert response.status_code == 401


def test_expired_and_foreign_tokens_are_rejected(app, client, make_user):
    alice = make_user('alice')
    now = datetime.now(timezone.utc)
    claims = {
        'iss': JWT_ISSUER,
        'aud': JWT_AUDIENCE,
        'iat': now - timedelta(days=2),
        'exp': now - timedelta(days=1),
        'data': {'id': alice, 'username': 'alice', 'email': 'alice@example.com'},
    }

    expired = jwt.encode(claims, app.config['JWT_SECRET'], algorithm='HS256')
    response = client.get('/users/me', headers={'Authorization': f'Bearer {expired}'})
    assert response.status_code == 401
    assert response.get_json()['error']['message'] == 'Token expired'

    claims['exp'] = now + timedelta(hours=1)
    forged = jwt.encode(claims, 'some-other-secret', algorithm='HS256')
    response = client.get('/users/me', headers={'Authorization': f'Bearer {forged}'})
    assert response.status_code == 401


def test_profile_counts(client, make_user, make_post, auth_headers):
    alice = make_user('alice')
    bob = make_user('bob')
    post_id = make_post(alice)
    make_post(alice)
    client.post(f'/posts/{post_id}/like', headers=auth_headers(bob))

    response = client.get('/users/me', headers=auth_headers(alice))
    profile = response.get_json()['data']
    assert profile['id'] == alice
    assert profile['post_count'] == 2
    assert profile['likes_received'] == 1

    response = client.get(f'/users/{alice}', headers=auth_headers(bob))
    assert response.get_json()['data']['username'] == 'alice'

    assert client.get('/users/999', headers=auth_headers(bob)).status_code == 404


def test_update_profile(client, make_user, auth_headers):
    headers = auth_headers(make_user('alice'))

    response = client.put('/users/me', json={
        'bio': 'I write Rust',
        'github_url': 'https://github.com/alice'
    }, headers=headers)
    assert response.status_code == 200

    response = client.patch('/users/me', json={'profile_image': '/uploads/me.png'}, headers=headers)
    assert response.status_code == 200

    profile = client.get('/users/me', headers=headers).get_json()['data']
    assert profile['bio'] == 'I write Rust'
    assert profile['github_url'] == 'https://github.com/alice'
    assert profile['profile_image'] == '/uploads/me.png'

    response = client.put('/users/me', json={'unknown': 'field'}, headers=headers)
    assert response.status_code == 400


def test_search_users(client, make_user, auth_headers):
    alice = make_user('alice')
    make_user('alicia')
    make_user('bob', email='bob@corp.io')
    headers = auth_headers(alice)

    response = client.get('/users/search', query_string={'q': 'a'}, headers=headers)
    assert response.get_json()['data']['users'] == []

    response = client.get('/users/search', query_string={'q': 'ALI'}, headers=headers)
    assert [user['username'] for user in response.get_json()['data']['users']] == ['alice', 'alicia']

    response = client.get('/users/search', query_string={'q': 'corp'}, headers=headers)
    assert [user['username'] for user in response.get_json()['data']['users']] == ['bob']

    response = client.get('/users/search', query_string={'q': '%%'}, headers=headers)
    assert response.get_json()['data']['users'] == []


def test_search_users_maps_api_errors(client, make_user, auth_headers, monkeypatch):
    alice = make_user('alice')

    def reject(query):
        raise ValidationError("Search query is malformed")

    monkeypatch.setattr('resources.users.search_users', reject)

    response = client.get('/users/search', query_string={'q': 'alice'}, headers=auth_headers(alice))
    assert response.status_code == 400
    assert response.get_json()['error']['message'] == "Search query is malformed"
