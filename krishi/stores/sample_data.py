# Sample records used to seed an empty store
from datetime import datetime, timedelta


def _days_ago(days):
    return datetime.utcnow() - timedelta(days=days)


def sample_questions():
    return [
        {
            'id': 'q1',
            'title': 'Yellow leaves on my tomato plants',
            'crop': 'Tomato',
            'description': 'My tomato plants have developed yellow leaves at the bottom. '
                           'Is this a nutrient deficiency or disease?',
            'image_path': None,
            'status': 'answered',
            'created_at': _days_ago(7),
            'farmer_id': 'f1',
            'farmer_name': 'Rajesh Kumar',
            'answer': {
                'text': 'This is likely a nitrogen deficiency. The older leaves turning yellow at the '
                        'bottom is a classic sign. Try adding a nitrogen-rich fertilizer and make sure '
                        "you're not overwatering, which can wash away nutrients.",
                'expert_id': 'e1',
                'expert_name': 'Dr. Priya Sharma',
                'answered_at': _days_ago(5),
            },
        },
        {
            'id': 'q2',
            'title': 'Best time to harvest wheat',
            'crop': 'Wheat',
            'description': "I've planted wheat and am not sure when is the optimal time to harvest. "
                           'What signs should I look for?',
            'image_path': None,
            'status': 'pending',
            'created_at': _days_ago(3),
            'farmer_id': 'f2',
            'farmer_name': 'Amit Singh',
            'answer': None,
        },
        {
            'id': 'q3',
            'title': 'White spots on cucumber leaves',
            'crop': 'Cucumber',
            'description': 'My cucumber plants have white powdery spots on the leaves. The plants are '
                           "still producing but I'm worried about the disease spreading.",
            'image_path': None,
            'status': 'pending',
            'created_at': _days_ago(1),
            'farmer_id': 'f1',
            'farmer_name': 'Rajesh Kumar',
            'answer': None,
        },
        {
            'id': 'q4',
            'title': 'Paddy irrigation frequency',
            'crop': 'Rice',
            'description': 'How often should I irrigate my paddy field during the dry season? '
                           'Is once a week sufficient?',
            'image_path': None,
            'status': 'answered',
            'created_at': _days_ago(10),
            'farmer_id': 'f3',
            'farmer_name': 'Lakshmi Devi',
            'answer': {
                'text': 'For paddy fields during dry season, maintaining consistent water level is '
                        'crucial. Once a week is not enough - you should maintain 2-5cm of standing '
                        'water at all times. Check water levels every 2-3 days and irrigate as needed.',
                'expert_id': 'e2',
                'expert_name': 'Dr. Mohan Rao',
                'answered_at': _days_ago(8),
            },
        },
    ]


def sample_warehouses():
    return [
        {
            'id': 'w1',
            'name': 'Central Storage Facility',
            'location': 'Amritsar, Punjab',
            'capacity': 5000.0,
            'available': 3500.0,
            'vendor_id': 'v1',
            'created_at': _days_ago(30),
        },
        {
            'id': 'w2',
            'name': 'East Side Grain Silo',
            'location': 'Ludhiana, Punjab',
            'capacity': 2000.0,
            'available': 500.0,
            'vendor_id': 'v1',
            'created_at': _days_ago(15),
        },
        {
            'id': 'w3',
            'name': 'Western Cold Storage',
            'location': 'Bathinda, Punjab',
            'capacity': 1000.0,
            'available': 800.0,
            'vendor_id': 'v1',
            'created_at': _days_ago(7),
        },
    ]
