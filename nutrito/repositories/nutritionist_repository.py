# /nutrito/repositories/nutritionist_repository.py
from sqlalchemy import or_

from nutrito.models.nutritionist_models import (
    Nutritionist, NutritionistSpecialty, NutritionistModality, Review
)


class NutritionistRepository:

    def get_active(self, nutritionist_id):
        return Nutritionist.query.filter_by(id=nutritionist_id, is_active=True).first()

    def search(self, name=None, specialties=None, modalities=None, rating_min=None, limit=20, offset=0):
        """Active nutritionists matching every given filter. Returns (items, total).

        A nutritionist matches a list of specialties (or modalities) when it
        offers at least one of them.
        """
        query = Nutritionist.query.filter(Nutritionist.is_active.is_(True))

        if name:
            pattern = f"%{name.strip()}%"
            query = query.filter(or_(
                Nutritionist.first_name.ilike(pattern),
                Nutritionist.last_name.ilike(pattern),
                (Nutritionist.first_name + ' ' + Nutritionist.last_name).ilike(pattern),
            ))
        if specialties:
            query = query.filter(Nutritionist.specialty_rows.any(NutritionistSpecialty.name.in_(specialties)))
        if modalities:
            query = query.filter(Nutritionist.modality_rows.any(NutritionistModality.name.in_(modalities)))
        if rating_min is not None:
            query = query.filter(Nutritionist.rating >= rating_min)

        total = query.count()
        items = (
            query.order_by(Nutritionist.rating.desc(), Nutritionist.total_reviews.desc(), Nutritionist.last_name)
            .limit(limit)
            .offset(offset)
            .all()
        )
        return items, total

    def recent_reviews(self, nutritionist_id, limit=10):
        return (
            Review.query.filter_by(nutritionist_id=nutritionist_id)
            .order_by(Review.created_at.desc())
            .limit(limit)
            .all()
        )
