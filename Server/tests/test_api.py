import pytest

from wordle_service import create_app
from wordle_service.config import TestingConfig
from wordle_service.errors import ServiceUnavailableError


def start(client, owner=None):
    headers = {'X-User-Id': owner} if owner else {}
    return client.post('/api/game/start', headers=headers)


def guess(client, session_id, word, owner=None):
    headers = {'X-User-Id': owner} if owner else {}
    return client.post(f'/api/game/{session_id}/guess', json={'guess': word}, headers=headers)


def test_start_game(client, set_target):
    set_target('CRANE')

    response = start(client, 'alice')

    assert response.status_code == 201
    body = response.get_json()
    assert body['success'] is True
    assert body['data']['status'] == 'ACTIVE'
    assert body['data']['owner_id'] == 'alice'
    assert body['data']['remaining_guesses'] == 6
    assert body['data']['target_word'] is None
    assert 'CRANE' not in response.get_data(as_text=True)


def test_owner_from_json_body(client):
    response = client.post('/api/game/start', json={'userId': 'bob'})

    assert response.get_json()['data']['owner_id'] == 'bob'


def test_second_start_conflicts(client):
    assert start(client, 'alice').status_code == 201

    response = start(client, 'alice')

    assert response.status_code == 409
    assert response.get_json()['success'] is False


def test_play_to_win(client, set_target):
    set_target('CRANE')
    session_id = start(client, 'alice').get_json()['data']['session_id']

    first = guess(client, session_id, 'slate', 'alice')
    assert first.status_code == 200
    assert first.get_json()['data']['feedback'] == ['ABSENT', 'ABSENT', 'CORRECT', 'ABSENT', 'CORRECT']

    win = guess(client, session_id, 'crane', 'alice').get_json()
    assert win['data']['status'] == 'WON'
    assert win['data']['target_word'] == 'CRANE'

    state = client.get(f'/api/game/{session_id}', headers={'X-User-Id': 'alice'}).get_json()
    assert state['data']['status'] == 'WON'
    assert state['data']['guess_results'][1] == [[letter, 'CORRECT'] for letter in 'CRANE']
    assert state['data']['letter_status']['C'] == 'CORRECT'

    assert guess(client, session_id, 'slate', 'alice').status_code == 409


def test_unknown_word(client):
    session_id = start(client).get_json()['data']['session_id']

    response = guess(client, session_id, 'zzzzz')

    assert response.status_code == 200
    body = response.get_json()
    assert body['message'] == 'Word not in dictionary'
    assert body['data']['valid'] is False
    assert body['data']['remaining_guesses'] == 6


@pytest.mark.parametrize('word', ['ab12c', 'abc', 'toolong'])
def test_malformed_guess(client, word):
    session_id = start(client).get_json()['data']['session_id']

    assert guess(client, session_id, word).status_code == 400


def test_missing_guess(client):
    session_id = start(client).get_json()['data']['session_id']

    response = client.post(f'/api/game/{session_id}/guess', json={})

    assert response.status_code == 400
    assert response.get_json()['error'] == 'Guess is required'


def test_unknown_session(client):
    assert client.get('/api/game/does-not-exist').status_code == 404
    assert guess(client, 'does-not-exist', 'CRANE').status_code == 404


def test_other_owner_forbidden(client):
    session_id = start(client, 'alice').get_json()['data']['session_id']

    assert client.get(f'/api/game/{session_id}', headers={'X-User-Id': 'mallory'}).status_code == 403
    assert guess(client, session_id, 'CRANE', 'mallory').status_code == 403


def test_active_game(client):
    empty = client.get('/api/game/active/alice').get_json()
    assert empty['data'] is None
    assert empty['message'] == 'No active game found'

    session_id = start(client, 'alice').get_json()['data']['session_id']

    active = client.get('/api/game/active/alice').get_json()
    assert active['data']['session_id'] == session_id
    assert active['data']['target_word'] is None


def test_corpus_outage_is_503(client, corpus, monkeypatch):
    def unavailable():
        raise ServiceUnavailableError('Word corpus unavailable')

    monkeypatch.setattr(corpus, 'random_word', unavailable)

    response = start(client, 'alice')

    assert response.status_code == 503
    assert response.get_json()['error'] == 'Word corpus unavailable'


def test_unexpected_error_is_500(client, engine, monkeypatch):
    def broken(owner_id=None):
        raise RuntimeError('boom')

    monkeypatch.setattr(engine, 'create_session', broken)

    response = start(client)

    assert response.status_code == 500
    assert response.get_json()['error'] == 'Internal server error'


def test_dictionary_endpoints(client, corpus):
    assert client.get('/api/dictionary/validate/crane').get_json()['data'] == {'word': 'CRANE', 'valid': True}
    assert client.get('/api/dictionary/validate/zzzzz').get_json()['data']['valid'] is False

    stats = client.get('/api/dictionary/stats').get_json()['data']
    assert stats['word_count'] == corpus.size()
    assert stats['source'] == 'fallback'

    refreshed = client.post('/api/dictionary/refresh').get_json()
    assert refreshed['success'] is True
    assert refreshed['data']['source'] == 'fallback'


def test_refresh_failure_is_503(client, corpus, monkeypatch):
    monkeypatch.setattr(corpus, 'fallback_words', ())

    response = client.post('/api/dictionary/refresh')

    assert response.status_code == 503


def test_health(client, corpus):
    assert client.get('/api/health').status_code == 503

    corpus.initialize()
    response = client.get('/api/health')

    assert response.status_code == 200
    body = response.get_json()
    assert body['status'] == 'healthy'
    assert body['checks']['dictionary']['word_count'] == corpus.size()
    assert body['checks']['session_store']['status'] == 'healthy'


def test_missing_engine_is_500(engine):
    app = create_app(TestingConfig, engine)
    app.game_engine = None

    response = app.test_client().post('/api/game/start')

    assert response.status_code == 500
