"""
Storage backend interface shared by the relational and local stores.

Both backends hand out plain dict records so views and templates do not
care which one is configured.
"""
from krishi.stores.errors import InvalidRecord

QUESTIONS_TABLE = 'questions'
WAREHOUSES_TABLE = 'warehouses'

WAREHOUSE_FIELDS = ('name', 'location', 'capacity', 'available')


def newest_first(records):
    return sorted(records, key=lambda r: r['created_at'], reverse=True)


def normalize_capacity(capacity, available):
    """Validate tonnage and clamp ``available`` to ``capacity``."""
    try:
        capacity = float(capacity)
        available = float(available)
    except (TypeError, ValueError):
        raise InvalidRecord('Capacity and available space must be numbers')

    if capacity < 1:
        raise InvalidRecord('Capacity must be at least 1 ton')
    if available < 0:
        raise InvalidRecord('Available space cannot be negative')

    return capacity, min(available, capacity)


class QuestionStore:
    """Questions and their (single) answer."""

    def __init__(self, feed=None):
        self.feed = feed

    def _publish(self, event, record_id):
        if self.feed is not None:
            self.feed.publish(QUESTIONS_TABLE, event, record_id)

    def list_questions(self):
        raise NotImplementedError

    def get_question(self, question_id):
        raise NotImplementedError

    def add_question(self, farmer, title, crop, description, image_path=None):
        raise NotImplementedError

    def answer_question(self, question_id, text, expert):
        raise NotImplementedError

    def questions_by_farmer(self, farmer_id):
        farmer_id = str(farmer_id)
        return [q for q in self.list_questions() if q['farmer_id'] == farmer_id]

    def pending_questions(self):
        return [q for q in self.list_questions() if q['status'] == 'pending']

    def answered_questions(self):
        return [q for q in self.list_questions() if q['status'] == 'answered']

    def answered_by_expert(self, expert_id):
        expert_id = str(expert_id)
        return [q for q in self.answered_questions()
                if q['answer'] and q['answer']['expert_id'] == expert_id]


class WarehouseStore:
    """Vendor warehouse listings."""

    def __init__(self, feed=None):
        self.feed = feed

    def _publish(self, event, record_id):
        if self.feed is not None:
            self.feed.publish(WAREHOUSES_TABLE, event, record_id)

    def list_warehouses(self):
        raise NotImplementedError

    def get_warehouse(self, warehouse_id):
        raise NotImplementedError

    def add_warehouse(self, vendor, name, location, capacity, available):
        raise NotImplementedError

    def update_warehouse(self, warehouse_id, **changes):
        raise NotImplementedError

    def delete_warehouse(self, warehouse_id):
        raise NotImplementedError

    def warehouses_by_vendor(self, vendor_id):
        vendor_id = str(vendor_id)
        return [w for w in self.list_warehouses() if w['vendor_id'] == vendor_id]

    @staticmethod
    def _merge(current, changes):
        unknown = set(changes) - set(WAREHOUSE_FIELDS)
        if unknown:
            raise InvalidRecord(f'Unknown warehouse fields: {", ".join(sorted(unknown))}')

        merged = {field: current[field] for field in WAREHOUSE_FIELDS}
        merged.update(changes)
        merged['capacity'], merged['available'] = normalize_capacity(
            merged['capacity'], merged['available'])
        return merged
