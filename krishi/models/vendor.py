# Vendor Module Models
from krishi.models.user import db
from datetime import datetime


class Warehouse(db.Model):
    __tablename__ = 'warehouses'

    id = db.Column(db.Integer, primary_key=True)
    vendor_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    location = db.Column(db.String(100), nullable=False)
    capacity = db.Column(db.Float, nullable=False)  # in tons
    available = db.Column(db.Float, nullable=False)  # free space in tons
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    vendor = db.relationship('User', backref='warehouses')

    def to_dict(self):
        return {
            'id': str(self.id),
            'name': self.name,
            'location': self.location,
            'capacity': self.capacity,
            'available': self.available,
            'vendor_id': str(self.vendor_id),
            'created_at': self.created_at,
        }

    def __repr__(self):
        return f'<Warehouse {self.id} - {self.name}>'
