# Dashboard statistics and list filters
import math

from krishi.models import QUESTION_STATUSES

FARMING_TIPS = [
    ('Soil Health', 'Regularly test your soil to check pH levels and nutrient content. '
                    'This helps in making informed decisions about fertilizers.'),
    ('Water Management', 'Implement drip irrigation to conserve water while ensuring plants get '
                         'adequate moisture. Morning is the best time to water most crops.'),
    ('Crop Rotation', 'Practice crop rotation to maintain soil fertility and prevent pest buildup. '
                      'Avoid planting same family crops in succession.'),
]


def round_half_up(value):
    return int(math.floor(value + 0.5))


def _matches(term, *values):
    return any(term in (value or '').lower() for value in values)


def filter_questions(questions, search='', status='all', include_people=False):
    """Text search over title, description and crop plus a status filter.

    With ``include_people`` the farmer name and answer text are searched
    too (the expert view).
    """
    term = (search or '').strip().lower()
    results = []
    for question in questions:
        if status in QUESTION_STATUSES and question['status'] != status:
            continue
        if term:
            fields = [question['title'], question['description'], question['crop']]
            if include_people:
                fields.append(question.get('farmer_name'))
                if question.get('answer'):
                    fields.append(question['answer']['text'])
            if not _matches(term, *fields):
                continue
        results.append(question)
    return sorted(results, key=lambda q: q['created_at'], reverse=True)


def filter_warehouses(warehouses, search=''):
    term = (search or '').strip().lower()
    results = [w for w in warehouses if not term or _matches(term, w['name'], w['location'])]
    return sorted(results, key=lambda w: w['created_at'], reverse=True)


def farmer_summary(questions):
    return {
        'total': len(questions),
        'pending': len([q for q in questions if q['status'] == 'pending']),
        'answered': len([q for q in questions if q['status'] == 'answered']),
        'recent': questions[:3],
    }


def expert_summary(all_questions, expert_id):
    expert_id = str(expert_id)
    pending = [q for q in all_questions if q['status'] == 'pending']
    mine = [q for q in all_questions
            if q['status'] == 'answered' and q['answer'] and q['answer']['expert_id'] == expert_id]
    mine.sort(key=lambda q: q['answer']['answered_at'], reverse=True)
    return {
        'pending_count': len(pending),
        'answered_by_me_count': len(mine),
        'total_count': len(all_questions),
        'recent_pending': pending[:5],
        'urgent': pending[:2],
        'my_recent_answers': [
            dict(q, answer_preview=q['answer']['text'][:100]) for q in mine[:3]
        ],
    }


def warehouse_utilization(warehouse):
    capacity = warehouse['capacity']
    if capacity <= 0:
        return 0
    return round_half_up((capacity - warehouse['available']) / capacity * 100)


def efficiency_label(utilization):
    if utilization > 80:
        return 'Excellent'
    if utilization > 60:
        return 'Good'
    return 'Room for improvement'


def utilization_grade(utilization):
    if utilization > 80:
        return 'A+'
    if utilization > 60:
        return 'B+'
    return 'C'


def warehouse_summary(warehouses):
    """Aggregate capacity figures for a vendor's warehouses."""
    total_capacity = sum(w['capacity'] for w in warehouses)
    total_available = sum(w['available'] for w in warehouses)
    total_used = total_capacity - total_available
    utilization = round_half_up(total_used / total_capacity * 100) if total_capacity > 0 else 0

    recommendations = []
    if warehouses:
        if utilization < 50:
            recommendations.append(('Increase Utilization',
                                    'Your warehouses are underutilized. Consider marketing to more '
                                    'farmers or adjusting pricing.'))
        if utilization > 90:
            recommendations.append(('Expand Capacity',
                                    'Your warehouses are nearly full. Consider adding more storage '
                                    'facilities to meet demand.'))
        if len(warehouses) == 1:
            recommendations.append(('Diversify Locations',
                                    'Consider adding warehouses in different locations to serve '
                                    'more farmers.'))

    return {
        'count': len(warehouses),
        'total_capacity': total_capacity,
        'total_available': total_available,
        'total_used': total_used,
        'utilization': utilization,
        'average_capacity': round_half_up(total_capacity / len(warehouses)) if warehouses else 0,
        'efficiency': efficiency_label(utilization),
        'grade': utilization_grade(utilization),
        'overview': [dict(w, utilization=warehouse_utilization(w)) for w in warehouses[:5]],
        'has_more': len(warehouses) > 5,
        'recommendations': recommendations,
    }
