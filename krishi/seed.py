# Demo data seeding
import logging

from sqlalchemy.exc import SQLAlchemyError

from krishi.models import db, User, Question, Answer, Warehouse
from krishi.stores.sample_data import sample_questions, sample_warehouses

logger = logging.getLogger(__name__)

DEMO_PASSWORD = 'demo123'

DEMO_USERS = [
    {
        'email': 'farmer@demo.com',
        'name': 'Rajesh Kumar',
        'role': 'farmer',
        'phone': '9876543210',
        'location': 'Amritsar, Punjab',
    },
    {
        'email': 'expert@demo.com',
        'name': 'Dr. Priya Sharma',
        'role': 'expert',
        'phone': '9876543211',
        'location': 'Ludhiana, Punjab',
        'expertise': ['Crop Disease Management', 'Soil Health'],
    },
    {
        'email': 'vendor@demo.com',
        'name': 'Harpreet Warehousing',
        'role': 'vendor',
        'phone': '9876543212',
        'location': 'Bathinda, Punjab',
    },
]


def _create_demo_users():
    users = {}
    for user_data in DEMO_USERS:
        user = User(
            email=user_data['email'],
            name=user_data['name'],
            role=user_data['role'],
            phone=user_data.get('phone'),
            location=user_data.get('location'),
            is_active=True,
        )
        user.expertise_list = user_data.get('expertise')
        user.set_password(DEMO_PASSWORD)
        db.session.add(user)
        users[user.role] = user
    db.session.flush()
    return users


def _create_sample_records(users):
    # Sample records reference placeholder owners; attach them to the demo accounts
    for data in sample_questions():
        question = Question(
            farmer_id=users['farmer'].id,
            title=data['title'],
            crop=data['crop'],
            description=data['description'],
            status=data['status'],
            created_at=data['created_at'],
        )
        if data['answer']:
            question.answer = Answer(
                expert_id=users['expert'].id,
                text=data['answer']['text'],
                answered_at=data['answer']['answered_at'],
            )
        db.session.add(question)

    for data in sample_warehouses():
        db.session.add(Warehouse(
            vendor_id=users['vendor'].id,
            name=data['name'],
            location=data['location'],
            capacity=data['capacity'],
            available=data['available'],
            created_at=data['created_at'],
        ))


def seed_demo_data(include_records=True):
    """Create demo users (and sample records) unless they already exist.

    Returns a dict with the created usernames, or ``{'skipped': True}``.
    """
    if User.query.filter_by(email=DEMO_USERS[0]['email']).first():
        logger.info('Demo users already exist, skipping seeding')
        return {'created': [], 'skipped': True}

    try:
        users = _create_demo_users()
        if include_records:
            _create_sample_records(users)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Could not seed demo data')
        raise

    created = [u['email'] for u in DEMO_USERS]
    logger.info('Seeded %d demo users: %s', len(created), ', '.join(created))
    return {'created': created, 'skipped': False}
