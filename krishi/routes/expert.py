# Expert Module Routes
from flask import Blueprint, render_template, request, flash, redirect, url_for, abort, current_app
from flask_login import current_user

from krishi.forms import AnswerForm
from krishi.models import QUESTION_STATUSES
from krishi.stores import get_question_store, StoreError, RecordNotFound, InvalidTransition, QUESTIONS_TABLE
from krishi.utils.dashboard import expert_summary, filter_questions
from krishi.utils.decorators import role_required

expert_bp = Blueprint('expert', __name__)


# ==================== DASHBOARD ====================

@expert_bp.route('/dashboard')
@role_required('expert')
def dashboard():
    questions = get_question_store().list_questions()
    return render_template('expert/dashboard.html',
                           summary=expert_summary(questions, current_user.id),
                           watch_tables=[QUESTIONS_TABLE])


# ==================== QUESTIONS ====================

@expert_bp.route('/questions')
@role_required('expert')
def questions():
    search = request.args.get('search', '', type=str)
    tab = request.args.get('tab', 'pending', type=str)
    if tab not in QUESTION_STATUSES:
        tab = 'pending'

    store = get_question_store()
    pending = filter_questions(store.pending_questions(), search=search, include_people=True)
    answered = filter_questions(store.answered_questions(), search=search, include_people=True)

    return render_template('expert/questions.html',
                           pending=pending,
                           answered=answered,
                           search=search,
                           tab=tab,
                           watch_tables=[QUESTIONS_TABLE])


@expert_bp.route('/questions/<question_id>/answer', methods=['GET', 'POST'])
@role_required('expert')
def answer_question(question_id):
    store = get_question_store()
    try:
        question = store.get_question(question_id)
    except RecordNotFound:
        abort(404)

    if question['status'] != 'pending':
        flash('This question has already been answered.', 'warning')
        return redirect(url_for('expert.questions', tab='answered'))

    form = AnswerForm()
    if form.validate_on_submit():
        try:
            store.answer_question(question_id, form.answer.data.strip(), current_user)
        except InvalidTransition:
            flash('This question has already been answered.', 'warning')
            return redirect(url_for('expert.questions', tab='answered'))
        except StoreError:
            current_app.logger.exception('Could not save answer for question %s', question_id)
            flash('An error occurred while saving your answer. Please try again.', 'danger')
        else:
            flash('Answer submitted successfully! The farmer will be notified of your response.', 'success')
            return redirect(url_for('expert.questions'))

    return render_template('expert/answer_question.html', question=question, form=form)
