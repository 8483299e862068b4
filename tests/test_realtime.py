import pytest

from krishi.realtime import ChangeFeed, ALL_TABLES
from krishi.stores import get_question_store, get_warehouse_store
from conftest import get_user


def test_versions_increase_per_table():
    feed = ChangeFeed()
    assert feed.version('questions') == 0

    feed.publish('questions', 'INSERT', 1)
    feed.publish('questions', 'UPDATE', 1)
    feed.publish('warehouses', 'INSERT', 'w1')

    assert feed.version('questions') == 2
    assert feed.version('warehouses') == 1
    assert [c.record_id for c in feed.changes_since('questions')] == ['1', '1']
    assert [c.event for c in feed.changes_since('questions', 1)] == ['UPDATE']
    assert feed.changes_since('questions', 2) == []


def test_unknown_event_is_rejected():
    feed = ChangeFeed()
    with pytest.raises(ValueError):
        feed.publish('questions', 'TRUNCATE', 1)
    assert feed.version('questions') == 0


def test_history_is_bounded():
    feed = ChangeFeed(max_history=3)
    for i in range(5):
        feed.publish('warehouses', 'INSERT', i)

    assert feed.version('warehouses') == 5
    assert [c.version for c in feed.changes_since('warehouses')] == [3, 4, 5]


def test_subscribers_are_notified_until_unsubscribed():
    feed = ChangeFeed()
    seen, everything = [], []
    unsubscribe = feed.subscribe('questions', seen.append)
    feed.subscribe(ALL_TABLES, everything.append)

    feed.publish('questions', 'INSERT', 'q1')
    feed.publish('warehouses', 'DELETE', 'w1')
    unsubscribe()
    feed.publish('questions', 'UPDATE', 'q1')

    assert [(c.table, c.event) for c in seen] == [('questions', 'INSERT')]
    assert [(c.table, c.event) for c in everything] == [
        ('questions', 'INSERT'), ('warehouses', 'DELETE'), ('questions', 'UPDATE'),
    ]


def test_failing_subscriber_does_not_break_publish():
    feed = ChangeFeed()
    seen = []

    def broken(change):
        raise RuntimeError('listener blew up')

    feed.subscribe('questions', broken)
    feed.subscribe('questions', seen.append)
    change = feed.publish('questions', 'INSERT', 'q1')

    assert change.version == 1
    assert seen == [change]


def test_feed_takes_history_size_from_config(app):
    assert app.extensions['change_feed'].max_history == app.config['CHANGE_FEED_SIZE']


def test_changes_endpoint_requires_login(client):
    response = client.get('/api/changes/questions')
    assert response.status_code == 401
    assert response.get_json() == {'error': 'Authentication required'}


def test_changes_endpoint_unknown_table(client, login_as):
    login_as('farmer')
    response = client.get('/api/changes/users')
    assert response.status_code == 404


@pytest.mark.parametrize('backend', ['sql', 'local'])
def test_changes_endpoint_reports_new_writes(app, client, login_as, backend):
    login_as('expert')
    data = client.get('/api/changes/questions').get_json()
    since = data['version']

    with app.app_context():
        store = get_question_store()
        question = store.add_question(get_user('farmer'), 'Leaf curl on chilli', 'Chilli',
                                      'Leaves are curling upwards on most of my chilli plants.')
        store.answer_question(question['id'], 'Control the whitefly population with yellow sticky traps.',
                              get_user('expert'))

    data = client.get(f'/api/changes/questions?since={since}').get_json()
    assert data['table'] == 'questions'
    assert data['version'] == since + 2
    assert [(c['event'], c['record_id']) for c in data['changes']] == [
        ('INSERT', question['id']),
        ('UPDATE', question['id']),
    ]

    data = client.get(f"/api/changes/questions?since={data['version']}").get_json()
    assert data['changes'] == []


def test_warehouse_changes(app, client, login_as):
    login_as('vendor')
    with app.app_context():
        store = get_warehouse_store()
        warehouse = store.add_warehouse(get_user('vendor'), 'Cold Store', 'Amritsar', 100, 10)
        store.update_warehouse(warehouse['id'], available=20)
        store.delete_warehouse(warehouse['id'])

    data = client.get('/api/changes/warehouses?since=0').get_json()
    assert [c['event'] for c in data['changes']] == ['INSERT', 'UPDATE', 'DELETE']


def test_pages_embed_change_polling(client, login_as):
    login_as('expert')
    response = client.get('/expert/questions')
    assert b'/api/changes/__table__' in response.data


def test_questions_api_scopes_to_farmer(app, client, login_as):
    with app.app_context():
        store = get_question_store()
        store.add_question(get_user('farmer'), 'Mine to see', 'Wheat', 'A description that is long enough.')
        store.add_question(get_user('other_farmer'), 'Not for me', 'Wheat', 'A description that is long enough.')

    login_as('farmer')
    titles = [q['title'] for q in client.get('/api/questions').get_json()['questions']]
    assert titles == ['Mine to see']


def test_questions_api_for_expert_lists_all(app, client, login_as):
    with app.app_context():
        store = get_question_store()
        store.add_question(get_user('farmer'), 'First', 'Wheat', 'A description that is long enough.')
        store.add_question(get_user('other_farmer'), 'Second', 'Rice', 'A description that is long enough.')

    login_as('expert')
    questions = client.get('/api/questions').get_json()['questions']
    assert sorted(q['title'] for q in questions) == ['First', 'Second']
    assert isinstance(questions[0]['created_at'], str)


def test_warehouses_api_scopes_to_vendor(app, client, login_as):
    with app.app_context():
        store = get_warehouse_store()
        store.add_warehouse(get_user('vendor'), 'Mine', 'Amritsar', 100, 10)
        store.add_warehouse(get_user('other_vendor'), 'Theirs', 'Ludhiana', 100, 10)

    login_as('vendor')
    names = [w['name'] for w in client.get('/api/warehouses').get_json()['warehouses']]
    assert names == ['Mine']
