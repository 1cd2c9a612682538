"""
Tests for the Socket.IO host server and the REST word routes.
"""

import pytest

from undercover.web import GameServer
from undercover.words.catalog import CUSTOM_ID_START


@pytest.fixture
def server(game_config, catalog):
    return GameServer(config=game_config, catalog=catalog)


@pytest.fixture
def host(server):
    client = server.socketio.test_client(server.app)
    yield client
    if client.is_connected():
        client.disconnect()


@pytest.fixture
def watcher(server):
    client = server.socketio.test_client(server.app)
    yield client
    if client.is_connected():
        client.disconnect()


@pytest.fixture
def http(server):
    return server.app.test_client()


def _create_room(host, names=("Alice", "Bob", "Carol")):
    ack = host.emit('CREATE_ROOM', {'player_name': names[0]}, callback=True)
    code = ack['room_code']
    for name in names[1:]:
        host.emit('ADD_PLAYER', {'room_code': code, 'player_name': name}, callback=True)
    return code


def _events(client, name):
    return [message['args'][0] for message in client.get_received() if message['name'] == name]


def test_create_room_ack(host, server):
    ack = host.emit('CREATE_ROOM', {'player_name': 'Alice'}, callback=True)

    assert ack['success'] is True
    assert ack['player']['name'] == 'Alice'
    assert ack['room']['code'] == ack['room_code']
    assert ack['room']['status'] == 'WAITING'
    assert server.registry.room_count() == 1


def test_rejection_ack(host):
    ack = host.emit('CREATE_ROOM', {'player_name': ''}, callback=True)
    assert ack == {'success': False, 'error': 'Player name is required', 'reason': 'invalid_input'}

    ack = host.emit('START_GAME', {'room_code': 'ZZZZ'}, callback=True)
    assert ack['reason'] == 'room_not_found'


def test_missing_payload_is_handled(host):
    ack = host.emit('SKIP_ELIMINATION', callback=True)
    assert ack['success'] is False


def test_only_the_creating_connection_is_host(host, watcher):
    code = _create_room(host)

    ack = watcher.emit('START_GAME', {'room_code': code}, callback=True)
    assert ack['reason'] == 'not_host'


def test_full_round_over_socket(host, watcher):
    """Test start, reveal and the redacted watcher view once play begins."""
    code = _create_room(host)
    assert watcher.emit('WATCH_ROOM', {'room_code': code.lower()}, callback=True)['success']
    watcher.get_received()

    ack = host.emit('START_GAME', {'room_code': code}, callback=True)
    assert ack['success'] is True
    assert all(player['role'] for player in ack['room']['players'])
    assert _events(watcher, 'phase_change')[0]['status'] == 'ROLE_REVEAL'

    for player in ack['room']['players']:
        reveal = host.emit('REVEAL_ROLE', {'room_code': code, 'player_id': player['id']}, callback=True)
        assert reveal['secret']['id'] == player['id']
    assert reveal['all_revealed'] is True
    assert all(player['role'] is None for player in reveal['room']['players'])

    updates = _events(watcher, 'room_update')
    latest = updates[-1]['room']
    assert latest['status'] == 'PLAYING'
    assert all(player['role'] is None and player['word'] is None for player in latest['players'])

    ack = host.emit('SKIP_ELIMINATION', {'room_code': code}, callback=True)
    assert ack['skipped'] is True
    assert ack['room']['round'] == 2
    assert ack['room']['can_undo'] is True

    ack = host.emit('UNDO_ACTION', {'room_code': code}, callback=True)
    assert ack['room']['round'] == 1


def test_watch_unknown_room(watcher):
    ack = watcher.emit('WATCH_ROOM', {'room_code': 'NOPE'}, callback=True)
    assert ack['reason'] == 'room_not_found'


def test_host_disconnect_closes_room(host, watcher, server):
    code = _create_room(host)
    watcher.emit('WATCH_ROOM', {'room_code': code}, callback=True)
    watcher.get_received()

    host.disconnect()

    assert server.registry.get_room(code) is None
    assert _events(watcher, 'room_closed') == [{'room_code': code}]


def test_health(http, host):
    _create_room(host)
    response = http.get('/health')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok', 'rooms': 1}


def test_list_categories_and_words(http):
    body = http.get('/api/categories').get_json()
    assert body['total_pairs'] == 4
    assert [category['name'] for category in body['categories']] == ['Animals', 'Food']

    body = http.get('/api/words?category=Food').get_json()
    assert body['total'] == 2
    assert {pair['civilian'] for pair in body['pairs']} == {'Pizza', 'Coffee'}


def test_word_crud_routes(http):
    response = http.post('/api/words', json={'civilian': 'Sun'})
    assert response.status_code == 400

    response = http.post('/api/words', json={'civilian': 'Sun', 'undercover': 'Moon', 'category': 'Space'})
    pair = response.get_json()['pair']
    assert pair['id'] == CUSTOM_ID_START

    response = http.put(f"/api/words/{pair['id']}", json={'undercover': 'Star'})
    assert response.get_json()['pair']['undercover'] == 'Star'

    assert http.put('/api/words/99999', json={'civilian': 'x'}).status_code == 404
    assert http.delete(f"/api/words/{pair['id']}").status_code == 200
    assert http.delete(f"/api/words/{pair['id']}").status_code == 404


def test_bulk_and_reset_routes(http):
    assert http.post('/api/words/bulk', json={'pairs': 'nope'}).status_code == 400

    response = http.post('/api/words/bulk', json={'pairs': [
        {'civilian': 'Sun', 'undercover': 'Moon', 'category': 'Space'},
        {'civilian': 'Mars'},
    ]})
    assert response.get_json()['added'] == 1

    response = http.post('/api/words/reset')
    assert response.get_json() == {'success': True, 'count': 4}
    assert http.get('/api/categories').get_json()['total_pairs'] == 4


def test_category_routes(http):
    assert http.put('/api/categories/Food', json={}).status_code == 400

    response = http.put('/api/categories/Food', json={'new_name': 'Meals'})
    assert response.get_json() == {'success': True, 'renamed': 2}

    response = http.delete('/api/categories/Meals')
    assert response.get_json() == {'success': True, 'deleted': 2}
    assert http.get('/api/categories').get_json()['total_pairs'] == 2
