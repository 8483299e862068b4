# Farmer Module Routes
from datetime import datetime
from pathlib import Path

from flask import Blueprint, render_template, request, flash, redirect, url_for, abort, current_app
from flask_login import current_user
from werkzeug.utils import secure_filename

from krishi.forms import QuestionForm
from krishi.stores import get_question_store, StoreError, RecordNotFound, QUESTIONS_TABLE
from krishi.utils.dashboard import farmer_summary, filter_questions, FARMING_TIPS
from krishi.utils.decorators import role_required
from krishi.utils.weather import get_weather

farmer_bp = Blueprint('farmer', __name__)


def save_question_image(upload):
    """Store an uploaded image and return its path relative to static/."""
    if not upload or not upload.filename:
        return None
    filename = secure_filename(upload.filename)
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    filename = f"{current_user.id}_{timestamp}_{filename}"

    upload_folder = Path(current_app.config['QUESTION_IMAGES_FOLDER'])
    upload_folder.mkdir(parents=True, exist_ok=True)
    upload.save(str(upload_folder / filename))
    return f"uploads/questions/{filename}"


# ==================== DASHBOARD ====================

@farmer_bp.route('/dashboard')
@role_required('farmer')
def dashboard():
    questions = get_question_store().questions_by_farmer(current_user.id)
    weather = get_weather(current_user.location)

    return render_template('farmer/dashboard.html',
                           summary=farmer_summary(questions),
                           weather=weather,
                           tips=FARMING_TIPS,
                           watch_tables=[QUESTIONS_TABLE])


@farmer_bp.route('/weather')
@role_required('farmer')
def weather():
    location = request.args.get('location') or current_user.location
    return render_template('farmer/weather.html', weather=get_weather(location))


# ==================== QUESTIONS ====================

@farmer_bp.route('/questions')
@role_required('farmer')
def questions():
    search = request.args.get('search', '', type=str)
    status = request.args.get('status', 'all', type=str)

    my_questions = get_question_store().questions_by_farmer(current_user.id)
    filtered = filter_questions(my_questions, search=search, status=status)

    return render_template('farmer/questions.html',
                           questions=filtered,
                           total=len(my_questions),
                           search=search,
                           status=status,
                           watch_tables=[QUESTIONS_TABLE])


@farmer_bp.route('/questions/new', methods=['GET', 'POST'])
@role_required('farmer')
def ask_question():
    form = QuestionForm()
    if form.validate_on_submit():
        try:
            image_path = save_question_image(form.image.data)
            get_question_store().add_question(
                current_user,
                title=form.title.data.strip(),
                crop=form.crop.data.strip(),
                description=form.description.data.strip(),
                image_path=image_path,
            )
        except (StoreError, OSError):
            current_app.logger.exception('Could not save question for user %s', current_user.id)
            flash('Failed to submit your question. Please try again.', 'danger')
        else:
            flash('Question submitted successfully! Experts will review your question soon.', 'success')
            return redirect(url_for('farmer.questions'))

    return render_template('farmer/ask_question.html', form=form)


@farmer_bp.route('/questions/<question_id>')
@role_required('farmer')
def view_question(question_id):
    try:
        question = get_question_store().get_question(question_id)
    except RecordNotFound:
        abort(404)

    if question['farmer_id'] != str(current_user.id):
        flash('Access denied.', 'danger')
        return redirect(url_for('farmer.questions'))

    return render_template('farmer/question_detail.html', question=question)
