# Local JSON-file storage backend
import json
import logging
import os
import random
import shutil
import string
import tempfile
import threading
from datetime import datetime
from pathlib import Path

from krishi.stores.base import QuestionStore, WarehouseStore, newest_first, normalize_capacity
from krishi.stores.errors import RecordNotFound, InvalidTransition
from krishi.stores.sample_data import sample_questions, sample_warehouses

logger = logging.getLogger(__name__)

DATE_FIELDS = ('created_at', 'answered_at')


def create_id(length=9):
    return ''.join(random.choices(string.ascii_lowercase + string.digits, k=length))


def _encode(value):
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f'Cannot serialise {type(value).__name__}')


def _decode(obj):
    for field in DATE_FIELDS:
        if isinstance(obj.get(field), str):
            obj[field] = datetime.fromisoformat(obj[field])
    return obj


class JsonCollection:
    """A list of records kept in memory and mirrored to one JSON file."""

    def __init__(self, path, defaults):
        self.path = Path(path)
        self.defaults = defaults
        self.lock = threading.RLock()
        self._records = None

    @property
    def records(self):
        with self.lock:
            if self._records is None:
                self._records = self._load()
            return self._records

    def _load(self):
        if not self.path.exists():
            return self._restore()
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                records = json.load(f, object_hook=_decode)
        except (OSError, ValueError):
            logger.exception('Could not read %s, restoring sample data', self.path)
            return self._restore()
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            logger.error('%s does not hold a list of records, restoring sample data', self.path)
            return self._restore()
        return records

    def _restore(self):
        records = self.defaults()
        self.save(records)
        return records

    def save(self, records=None):
        with self.lock:
            if records is not None:
                self._records = records
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_fd, tmp_path = tempfile.mkstemp(prefix='tmp_', suffix='.json', dir=self.path.parent)
            try:
                with os.fdopen(tmp_fd, 'w', encoding='utf-8') as f:
                    json.dump(self._records, f, ensure_ascii=False, indent=2, default=_encode)
                shutil.move(tmp_path, self.path)
            except Exception:
                os.unlink(tmp_path)
                raise

    def find(self, record_id):
        record_id = str(record_id)
        for record in self.records:
            if record['id'] == record_id:
                return record
        return None


class LocalQuestionStore(QuestionStore):

    def __init__(self, directory, feed=None):
        super().__init__(feed)
        self.collection = JsonCollection(Path(directory) / 'questions.json', sample_questions)

    def _load(self, question_id):
        question = self.collection.find(question_id)
        if question is None:
            raise RecordNotFound('Question', question_id)
        return question

    def list_questions(self):
        with self.collection.lock:
            return newest_first(dict(q) for q in self.collection.records)

    def get_question(self, question_id):
        with self.collection.lock:
            return dict(self._load(question_id))

    def add_question(self, farmer, title, crop, description, image_path=None):
        question = {
            'id': create_id(),
            'title': title,
            'crop': crop,
            'description': description,
            'image_path': image_path,
            'status': 'pending',
            'created_at': datetime.utcnow(),
            'farmer_id': str(farmer.id),
            'farmer_name': farmer.name,
            'answer': None,
        }
        with self.collection.lock:
            self.collection.records.insert(0, question)
            self.collection.save()
        self._publish('INSERT', question['id'])
        return dict(question)

    def answer_question(self, question_id, text, expert):
        with self.collection.lock:
            question = self._load(question_id)
            if question['status'] != 'pending':
                raise InvalidTransition(f'Question {question_id} has already been answered')
            question['status'] = 'answered'
            question['answer'] = {
                'text': text,
                'expert_id': str(expert.id),
                'expert_name': expert.name,
                'answered_at': datetime.utcnow(),
            }
            self.collection.save()
            record = dict(question)
        self._publish('UPDATE', record['id'])
        return record


class LocalWarehouseStore(WarehouseStore):

    def __init__(self, directory, feed=None):
        super().__init__(feed)
        self.collection = JsonCollection(Path(directory) / 'warehouses.json', sample_warehouses)

    def _load(self, warehouse_id):
        warehouse = self.collection.find(warehouse_id)
        if warehouse is None:
            raise RecordNotFound('Warehouse', warehouse_id)
        return warehouse

    def list_warehouses(self):
        with self.collection.lock:
            return newest_first(dict(w) for w in self.collection.records)

    def get_warehouse(self, warehouse_id):
        with self.collection.lock:
            return dict(self._load(warehouse_id))

    def add_warehouse(self, vendor, name, location, capacity, available):
        capacity, available = normalize_capacity(capacity, available)
        warehouse = {
            'id': create_id(),
            'name': name,
            'location': location,
            'capacity': capacity,
            'available': available,
            'vendor_id': str(vendor.id),
            'created_at': datetime.utcnow(),
        }
        with self.collection.lock:
            self.collection.records.insert(0, warehouse)
            self.collection.save()
        self._publish('INSERT', warehouse['id'])
        return dict(warehouse)

    def update_warehouse(self, warehouse_id, **changes):
        with self.collection.lock:
            warehouse = self._load(warehouse_id)
            warehouse.update(self._merge(warehouse, changes))
            self.collection.save()
            record = dict(warehouse)
        self._publish('UPDATE', record['id'])
        return record

    def delete_warehouse(self, warehouse_id):
        with self.collection.lock:
            warehouse = self._load(warehouse_id)
            self.collection.records.remove(warehouse)
            self.collection.save()
        self._publish('DELETE', warehouse['id'])
        return dict(warehouse)
