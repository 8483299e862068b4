from types import SimpleNamespace

import pytest

from krishi.stores.local import JsonCollection, LocalQuestionStore, LocalWarehouseStore
from krishi.realtime import ChangeFeed

FARMER = SimpleNamespace(id=11, name='Rajesh Kumar')
EXPERT = SimpleNamespace(id=12, name='Dr. Priya Sharma')
VENDOR = SimpleNamespace(id=13, name='Harpreet Warehousing')


def test_missing_file_is_seeded_with_samples(tmp_path):
    store = LocalWarehouseStore(tmp_path)
    assert sorted(w['id'] for w in store.list_warehouses()) == ['w1', 'w2', 'w3']
    assert (tmp_path / 'warehouses.json').exists()


def test_corrupt_file_is_replaced_with_samples(tmp_path):
    (tmp_path / 'questions.json').write_text('{not json', encoding='utf-8')
    store = LocalQuestionStore(tmp_path)
    assert sorted(q['id'] for q in store.list_questions()) == ['q1', 'q2', 'q3', 'q4']


@pytest.mark.parametrize('content', ['{"id": "q1"}', 'null', '["q1", "q2"]', '42'])
def test_file_without_record_list_is_replaced_with_samples(tmp_path, content):
    (tmp_path / 'questions.json').write_text(content, encoding='utf-8')
    store = LocalQuestionStore(tmp_path)
    assert sorted(q['id'] for q in store.list_questions()) == ['q1', 'q2', 'q3', 'q4']

    reopened = LocalQuestionStore(tmp_path)
    assert len(reopened.list_questions()) == 4


def test_failed_save_removes_temp_file(tmp_path):
    collection = JsonCollection(tmp_path / 'things.json', list)
    with pytest.raises(TypeError):
        collection.save([{'id': 'a', 'blob': object()}])
    assert list(tmp_path.iterdir()) == []


def test_records_survive_a_restart(tmp_path):
    store = LocalQuestionStore(tmp_path)
    question = store.add_question(FARMER, 'Stem borer in maize', 'Maize',
                                  'Holes are appearing in the stems of my maize plants.')
    store.answer_question(question['id'], 'Release Trichogramma cards and remove the dead hearts.', EXPERT)

    reopened = LocalQuestionStore(tmp_path)
    stored = reopened.get_question(question['id'])
    assert stored['status'] == 'answered'
    assert stored['answer']['expert_name'] == 'Dr. Priya Sharma'
    assert stored['created_at'] == question['created_at']
    assert stored['answer']['answered_at'].year >= 2024


def test_saves_do_not_leave_temp_files(tmp_path):
    store = LocalWarehouseStore(tmp_path)
    warehouse = store.add_warehouse(VENDOR, 'Cold Store', 'Amritsar', 100, 50)
    store.update_warehouse(warehouse['id'], available=75)
    store.delete_warehouse(warehouse['id'])
    assert sorted(p.name for p in tmp_path.iterdir()) == ['warehouses.json']


def test_returned_records_are_copies(tmp_path):
    store = LocalWarehouseStore(tmp_path)
    warehouse = store.get_warehouse('w1')
    warehouse['available'] = 0
    assert store.get_warehouse('w1')['available'] == 3500


def test_new_records_come_first(tmp_path):
    store = LocalQuestionStore(tmp_path)
    question = store.add_question(FARMER, 'Newest question', 'Onion',
                                  'Onion bulbs are rotting before they reach full size.')
    assert store.list_questions()[0]['id'] == question['id']
    assert len(question['id']) == 9


def test_publishes_to_feed(tmp_path):
    feed = ChangeFeed()
    store = LocalWarehouseStore(tmp_path, feed)
    store.update_warehouse('w2', capacity=400)
    [change] = feed.changes_since('warehouses')
    assert (change.event, change.record_id) == ('UPDATE', 'w2')
    assert store.get_warehouse('w2')['available'] == 400
