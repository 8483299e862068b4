# Expert Module Models
from krishi.models.user import db
from datetime import datetime


class Answer(db.Model):
    __tablename__ = 'answers'

    id = db.Column(db.Integer, primary_key=True)
    question_id = db.Column(db.Integer, db.ForeignKey('questions.id'), nullable=False, unique=True)
    expert_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    text = db.Column(db.Text, nullable=False)
    answered_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    question = db.relationship('Question', back_populates='answer')
    expert = db.relationship('User', backref='answers')

    def to_dict(self):
        return {
            'text': self.text,
            'expert_id': str(self.expert_id),
            'expert_name': self.expert.name if self.expert else None,
            'answered_at': self.answered_at,
        }

    def __repr__(self):
        return f'<Answer {self.id} for Question {self.question_id}>'
