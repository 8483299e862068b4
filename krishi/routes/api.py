# JSON API Routes
import time
from functools import wraps

from flask import Blueprint, request, jsonify
from flask_login import current_user

from krishi.stores import get_question_store, get_warehouse_store, get_change_feed, TABLES
from krishi.utils.weather import get_weather

api_bp = Blueprint('api', __name__)

MAX_WAIT_SECONDS = 30


def api_login_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not current_user.is_authenticated:
            return jsonify({'error': 'Authentication required'}), 401
        return view(*args, **kwargs)
    return wrapped


def _serialise(record):
    data = dict(record)
    for key, value in data.items():
        if hasattr(value, 'isoformat'):
            data[key] = value.isoformat()
        elif isinstance(value, dict):
            data[key] = _serialise(value)
    return data


@api_bp.route('/questions')
@api_login_required
def questions():
    store = get_question_store()
    if current_user.is_farmer():
        records = store.questions_by_farmer(current_user.id)
    else:
        records = store.list_questions()
    return jsonify({'questions': [_serialise(q) for q in records]})


@api_bp.route('/warehouses')
@api_login_required
def warehouses():
    store = get_warehouse_store()
    if current_user.is_vendor():
        records = store.warehouses_by_vendor(current_user.id)
    else:
        records = store.list_warehouses()
    return jsonify({'warehouses': [_serialise(w) for w in records]})


@api_bp.route('/changes/<table>')
@api_login_required
def changes(table):
    """Poll for changes after ``since``; ``wait`` turns it into a long poll."""
    if table not in TABLES:
        return jsonify({'error': f'Unknown table {table}'}), 404

    since = request.args.get('since', 0, type=int)
    wait = min(max(request.args.get('wait', 0, type=int), 0), MAX_WAIT_SECONDS)
    feed = get_change_feed()

    deadline = time.time() + wait
    new_changes = feed.changes_since(table, since)
    while not new_changes and time.time() < deadline:
        time.sleep(1)
        new_changes = feed.changes_since(table, since)

    return jsonify({
        'table': table,
        'version': feed.version(table),
        'changes': [
            {
                'version': c.version,
                'event': c.event,
                'record_id': c.record_id,
                'at': c.at.isoformat(),
            }
            for c in new_changes
        ],
    })


@api_bp.route('/weather')
@api_login_required
def weather():
    location = request.args.get('location') or current_user.location
    return jsonify(get_weather(location))
