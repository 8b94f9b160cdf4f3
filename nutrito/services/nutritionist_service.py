# /nutrito/services/nutritionist_service.py
from nutrito.repositories.nutritionist_repository import NutritionistRepository
from nutrito.services.availability import AvailabilityChecker
from nutrito.services.errors import NutritionistNotFound
from nutrito.utils.pagination import Page, clamp_window


class NutritionistService:
    """Public read side of nutritionists: search, profile and schedule."""

    def __init__(self, nutritionists=None, availability=None, default_limit=20, max_limit=100):
        self.nutritionists = nutritionists or NutritionistRepository()
        self.availability = availability or AvailabilityChecker()
        self.default_limit = default_limit
        self.max_limit = max_limit

    def search(self, name=None, specialties=None, modalities=None, rating_min=None, limit=None, offset=0):
        limit, offset = clamp_window(limit, offset, self.default_limit, self.max_limit)
        items, total = self.nutritionists.search(name, specialties, modalities, rating_min, limit, offset)
        return Page(items=items, total=total, limit=limit, offset=offset)

    def get(self, nutritionist_id):
        nutritionist = self.nutritionists.get_active(nutritionist_id)
        if nutritionist is None:
            raise NutritionistNotFound()
        return nutritionist

    def profile(self, nutritionist_id):
        nutritionist = self.get(nutritionist_id)
        data = nutritionist.to_dict()
        data['reviews'] = [review.to_dict() for review in self.nutritionists.recent_reviews(nutritionist_id)]
        return data

    def is_available(self, nutritionist_id, day, at):
        self.get(nutritionist_id)
        return self.availability.is_available(nutritionist_id, day, at)

    def schedule(self, nutritionist_id, day=None, slot_minutes=60):
        """Attention hours, plus the bookable times of ``day`` when given."""
        nutritionist = self.get(nutritionist_id)
        data = {
            'nutritionist_id': nutritionist.id,
            'attention_hours': [hours.to_dict() for hours in nutritionist.attention_hours],
        }
        if day is not None:
            data['date'] = day.isoformat()
            data['slots'] = self.availability.available_slots(nutritionist, day, slot_minutes)
        return data
