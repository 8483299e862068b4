"""
Forms for authentication, questions, answers and warehouses.
"""
from flask import current_app
from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileAllowed
from wtforms import StringField, PasswordField, BooleanField, SelectField, TextAreaField, FloatField
from wtforms.validators import DataRequired, Email, EqualTo, InputRequired, Length, NumberRange, Optional, ValidationError

from krishi.models import User, ROLES

ALLOWED_IMAGE_EXTENSIONS = ['png', 'jpg', 'jpeg', 'gif', 'webp']

ROLE_LABELS = {
    'farmer': 'Farmer',
    'expert': 'Agricultural Expert',
    'vendor': 'Warehouse Vendor',
}

ROLE_CHOICES = [(role, ROLE_LABELS[role]) for role in ROLES]


class LoginForm(FlaskForm):
    """Form for user login."""
    email = StringField('Email', validators=[DataRequired(), Email()])
    password = PasswordField('Password', validators=[DataRequired()])
    remember = BooleanField('Remember Me')


class RegistrationForm(FlaskForm):
    """Form for new user registration."""
    name = StringField('Full Name', validators=[DataRequired(), Length(min=2, max=100)])
    email = StringField('Email', validators=[DataRequired(), Email(), Length(max=120)])
    password = PasswordField('Password', validators=[
        DataRequired(),
        Length(min=6, message='Password must be at least 6 characters long')
    ])
    confirm_password = PasswordField('Confirm Password', validators=[
        DataRequired(),
        EqualTo('password', message='Passwords must match')
    ])
    role = SelectField('I am a', choices=ROLE_CHOICES, validators=[DataRequired()])
    phone = StringField('Phone Number', validators=[Optional(), Length(max=20)])
    location = StringField('Location', validators=[Optional(), Length(max=200)])
    expertise = StringField('Areas of Expertise', validators=[Optional(), Length(max=500)])

    def validate_email(self, email):
        """Validate that email is unique."""
        if User.query.filter_by(email=email.data.strip().lower()).first():
            raise ValidationError('This email is already registered. Please log in instead.')

    def expertise_areas(self):
        if not self.expertise.data:
            return []
        return [area.strip() for area in self.expertise.data.split(',') if area.strip()]


class QuestionForm(FlaskForm):
    title = StringField('Question Title', validators=[
        DataRequired(),
        Length(min=5, max=100, message='Title must be between 5 and 100 characters')
    ])
    crop = StringField('Crop/Plant Type', validators=[
        DataRequired(),
        Length(min=2, max=50, message='Crop name must be between 2 and 50 characters')
    ])
    description = TextAreaField('Detailed Description', validators=[
        DataRequired(),
        Length(min=20, max=1000, message='Description must be between 20 and 1000 characters')
    ])
    image = FileField('Upload Image (Optional)', validators=[
        FileAllowed(ALLOWED_IMAGE_EXTENSIONS, 'Images only!')
    ])

    def validate_image(self, field):
        upload = field.data
        if not upload or not getattr(upload, 'filename', None):
            return
        max_mb = current_app.config.get('MAX_IMAGE_SIZE_MB', 5)
        upload.stream.seek(0, 2)
        size = upload.stream.tell()
        upload.stream.seek(0)
        if size > max_mb * 1024 * 1024:
            raise ValidationError(f'Image must be smaller than {max_mb} MB')


class AnswerForm(FlaskForm):
    answer = TextAreaField('Your Answer', validators=[
        DataRequired(),
        Length(min=20, max=2000, message='Answer must be between 20 and 2000 characters')
    ])


class WarehouseForm(FlaskForm):
    name = StringField('Warehouse Name', validators=[
        DataRequired(),
        Length(min=3, max=100, message='Name must be between 3 and 100 characters')
    ])
    location = StringField('Location', validators=[
        DataRequired(),
        Length(min=3, max=100, message='Location must be between 3 and 100 characters')
    ])
    capacity = FloatField('Total Capacity (tons)', validators=[
        DataRequired(message='Capacity must be at least 1 ton'),
        NumberRange(min=1, max=100000, message='Capacity must be between 1 and 100,000 tons')
    ])
    available = FloatField('Available Space (tons)', validators=[
        InputRequired(message='Available space is required'),
        NumberRange(min=0, message='Available space cannot be negative')
    ])
