# User Model
from flask_sqlalchemy import SQLAlchemy
from flask_login import UserMixin
import bcrypt
import json
from datetime import datetime

db = SQLAlchemy()

ROLES = ('farmer', 'expert', 'vendor')


class User(UserMixin, db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    role = db.Column(db.String(20), nullable=False, index=True)  # farmer, expert, vendor
    phone = db.Column(db.String(20))
    location = db.Column(db.String(200))
    expertise = db.Column(db.Text)  # JSON list of expertise areas
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    last_login = db.Column(db.DateTime)

    def set_password(self, password):
        """Hash and set password using bcrypt"""
        salt = bcrypt.gensalt()
        self.password_hash = bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')

    def check_password(self, password):
        """Check if provided password matches hash using bcrypt"""
        return bcrypt.checkpw(password.encode('utf-8'), self.password_hash.encode('utf-8'))

    @property
    def expertise_list(self):
        if not self.expertise:
            return []
        try:
            return json.loads(self.expertise)
        except ValueError:
            return []

    @expertise_list.setter
    def expertise_list(self, areas):
        self.expertise = json.dumps(list(areas)) if areas else None

    def is_farmer(self):
        return self.role == 'farmer'

    def is_expert(self):
        return self.role == 'expert'

    def is_vendor(self):
        return self.role == 'vendor'

    def to_dict(self):
        return {
            'id': str(self.id),
            'email': self.email,
            'name': self.name,
            'role': self.role,
            'phone': self.phone,
            'location': self.location,
            'expertise': self.expertise_list,
        }

    def __repr__(self):
        return f'<User {self.email} ({self.role})>'
