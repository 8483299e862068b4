# Relational storage backend
import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from krishi.models import db, Question, Answer, Warehouse
from krishi.stores.base import QuestionStore, WarehouseStore, normalize_capacity
from krishi.stores.errors import RecordNotFound, InvalidTransition, StoreError

logger = logging.getLogger(__name__)


def _int_id(record_id):
    try:
        return int(record_id)
    except (TypeError, ValueError):
        return None


def _commit():
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception('Database commit failed')
        raise StoreError(str(e)) from e


class SqlQuestionStore(QuestionStore):

    def _load(self, question_id):
        question = None
        pk = _int_id(question_id)
        if pk is not None:
            question = db.session.get(Question, pk)
        if question is None:
            raise RecordNotFound('Question', question_id)
        return question

    def list_questions(self):
        questions = Question.query.order_by(Question.created_at.desc()).all()
        return [q.to_dict() for q in questions]

    def get_question(self, question_id):
        return self._load(question_id).to_dict()

    def add_question(self, farmer, title, crop, description, image_path=None):
        question = Question(
            farmer_id=farmer.id,
            title=title,
            crop=crop,
            description=description,
            image_path=image_path,
            status='pending',
        )
        db.session.add(question)
        _commit()
        self._publish('INSERT', question.id)
        return question.to_dict()

    def answer_question(self, question_id, text, expert):
        question = self._load(question_id)

        # Conditional update so two experts racing cannot both answer
        claimed = Question.query.filter_by(id=question.id, status='pending')\
            .update({'status': 'answered'}, synchronize_session=False)
        if not claimed:
            db.session.rollback()
            raise InvalidTransition(f'Question {question_id} has already been answered')

        db.session.add(Answer(
            question_id=question.id,
            expert_id=expert.id,
            text=text,
            answered_at=datetime.utcnow(),
        ))
        _commit()
        db.session.refresh(question)
        self._publish('UPDATE', question.id)
        return question.to_dict()

    def questions_by_farmer(self, farmer_id):
        pk = _int_id(farmer_id)
        if pk is None:
            return []
        questions = Question.query.filter_by(farmer_id=pk)\
            .order_by(Question.created_at.desc()).all()
        return [q.to_dict() for q in questions]

    def pending_questions(self):
        questions = Question.query.filter_by(status='pending')\
            .order_by(Question.created_at.desc()).all()
        return [q.to_dict() for q in questions]

    def answered_questions(self):
        questions = Question.query.filter_by(status='answered')\
            .order_by(Question.created_at.desc()).all()
        return [q.to_dict() for q in questions]

    def answered_by_expert(self, expert_id):
        pk = _int_id(expert_id)
        if pk is None:
            return []
        questions = Question.query.join(Answer)\
            .filter(Answer.expert_id == pk)\
            .order_by(Answer.answered_at.desc()).all()
        return [q.to_dict() for q in questions]


class SqlWarehouseStore(WarehouseStore):

    def _load(self, warehouse_id):
        warehouse = None
        pk = _int_id(warehouse_id)
        if pk is not None:
            warehouse = db.session.get(Warehouse, pk)
        if warehouse is None:
            raise RecordNotFound('Warehouse', warehouse_id)
        return warehouse

    def list_warehouses(self):
        warehouses = Warehouse.query.order_by(Warehouse.created_at.desc()).all()
        return [w.to_dict() for w in warehouses]

    def get_warehouse(self, warehouse_id):
        return self._load(warehouse_id).to_dict()

    def add_warehouse(self, vendor, name, location, capacity, available):
        capacity, available = normalize_capacity(capacity, available)
        warehouse = Warehouse(
            vendor_id=vendor.id,
            name=name,
            location=location,
            capacity=capacity,
            available=available,
        )
        db.session.add(warehouse)
        _commit()
        self._publish('INSERT', warehouse.id)
        return warehouse.to_dict()

    def update_warehouse(self, warehouse_id, **changes):
        warehouse = self._load(warehouse_id)
        merged = self._merge(warehouse.to_dict(), changes)
        for field, value in merged.items():
            setattr(warehouse, field, value)
        _commit()
        self._publish('UPDATE', warehouse.id)
        return warehouse.to_dict()

    def delete_warehouse(self, warehouse_id):
        warehouse = self._load(warehouse_id)
        record = warehouse.to_dict()
        db.session.delete(warehouse)
        _commit()
        self._publish('DELETE', record['id'])
        return record

    def warehouses_by_vendor(self, vendor_id):
        pk = _int_id(vendor_id)
        if pk is None:
            return []
        warehouses = Warehouse.query.filter_by(vendor_id=pk)\
            .order_by(Warehouse.created_at.desc()).all()
        return [w.to_dict() for w in warehouses]
