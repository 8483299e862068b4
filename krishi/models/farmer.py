# Farmer Module Models
from krishi.models.user import db
from datetime import datetime

QUESTION_STATUSES = ('pending', 'answered')


class Question(db.Model):
    __tablename__ = 'questions'

    id = db.Column(db.Integer, primary_key=True)
    farmer_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    title = db.Column(db.String(100), nullable=False)
    crop = db.Column(db.String(50), nullable=False)
    description = db.Column(db.Text, nullable=False)
    image_path = db.Column(db.String(255))
    status = db.Column(db.String(20), default='pending', nullable=False, index=True)  # pending, answered
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    farmer = db.relationship('User', backref='questions')
    answer = db.relationship('Answer', back_populates='question', uselist=False,
                             cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'id': str(self.id),
            'title': self.title,
            'crop': self.crop,
            'description': self.description,
            'image_path': self.image_path,
            'status': self.status,
            'created_at': self.created_at,
            'farmer_id': str(self.farmer_id),
            'farmer_name': self.farmer.name if self.farmer else None,
            'answer': self.answer.to_dict() if self.answer else None,
        }

    def __repr__(self):
        return f'<Question {self.id} - {self.crop}>'
