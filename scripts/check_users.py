import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from krishi import create_app
from krishi.models import User
from krishi.stores import get_question_store, get_warehouse_store

app = create_app()
with app.app_context():
    users = User.query.order_by(User.id).all()
    print(f'All users in database ({app.config["STORAGE_BACKEND"]} backend):')
    questions = get_question_store()
    warehouses = get_warehouse_store()
    for u in users:
        line = f'  ID {u.id}: {u.name} <{u.email}> ({u.role})'
        if u.is_farmer():
            line += f' - {len(questions.questions_by_farmer(u.id))} questions'
        elif u.is_expert():
            line += f' - {len(questions.answered_by_expert(u.id))} answers'
        elif u.is_vendor():
            line += f' - {len(warehouses.warehouses_by_vendor(u.id))} warehouses'
        print(line)
