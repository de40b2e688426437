def test_socket_connect_and_join(sio_client):
    # Ensure we are connected to /ws
    if not sio_client.is_connected('/ws'):
        sio_client.connect(namespace='/ws')
    assert sio_client.is_connected('/ws')

    # Flush any initial events
    sio_client.get_received('/ws')

    sio_client.emit('join_game', {'game_id': 'abcd'}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'joined' and pkt['args'][0]['room'] == 'game:abcd' for pkt in received)


def test_join_requires_game_id(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('join_game', {}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'error' for pkt in received)


def test_ping_pong(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('ping', {'n': 1}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'pong' and pkt['args'][0] == {'n': 1} for pkt in received)


def test_moves_and_quit_broadcast_state(sio_client, client):
    game_id = client.post('/tictactoe', json={'players': ['p1', 'p2'], 'columns': 3, 'rows': 3}).get_json()['gameId']
    sio_client.emit('join_game', {'game_id': game_id}, namespace='/ws')
    sio_client.get_received('/ws')  # flush

    client.post(f'/tictactoe/{game_id}/0', json={'row': 0, 'column': 0})
    updates = [e for e in sio_client.get_received('/ws') if e['name'] == 'state_update']
    assert updates and updates[-1]['args'][0] == {'game_id': game_id, 'state': 'IN_PROGRESS'}

    client.put(f'/tictactoe/{game_id}/quit')
    updates = [e for e in sio_client.get_received('/ws') if e['name'] == 'state_update']
    assert updates and updates[-1]['args'][0] == {'game_id': game_id, 'state': 'QUIT'}


def test_leave_stops_updates(sio_client, client):
    game_id = client.post('/tictactoe', json={'players': ['p1', 'p2'], 'columns': 3, 'rows': 3}).get_json()['gameId']
    sio_client.emit('join_game', {'game_id': game_id}, namespace='/ws')
    sio_client.emit('leave_game', {'game_id': game_id}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'left' for pkt in received)

    client.post(f'/tictactoe/{game_id}/0', json={'row': 0, 'column': 0})
    assert not any(e['name'] == 'state_update' for e in sio_client.get_received('/ws'))
