# /nutrito/services/linkage.py
import logging

from sqlalchemy.exc import SQLAlchemyError

from nutrito.extensions import db
from nutrito.repositories.link_repository import LinkRepository

logger = logging.getLogger(__name__)


def ensure_link(patient_id, nutritionist_id, links=None):
    """Record that the patient and nutritionist work together, at most once.

    Best effort: a persistence failure is rolled back and logged, never
    raised. Returns the active link, or None when it could not be written.
    """
    links = links or LinkRepository()
    try:
        link = links.find_active(patient_id, nutritionist_id)
        if link is None:
            link = links.create(patient_id, nutritionist_id)
            db.session.commit()
            logger.info("Linked patient %s with nutritionist %s", patient_id, nutritionist_id)
        return link
    except SQLAlchemyError:
        db.session.rollback()
        logger.warning(
            "Could not link patient %s with nutritionist %s",
            patient_id, nutritionist_id, exc_info=True,
        )
        return None
