# Database Models
from krishi.models.user import db, User, ROLES
from krishi.models.farmer import Question, QUESTION_STATUSES
from krishi.models.expert import Answer
from krishi.models.vendor import Warehouse

__all__ = [
    'db', 'User', 'ROLES',
    'Question', 'QUESTION_STATUSES', 'Answer',
    'Warehouse',
]
