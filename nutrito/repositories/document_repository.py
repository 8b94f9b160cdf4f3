# /nutrito/repositories/document_repository.py
from sqlalchemy import func

from nutrito.extensions import db
from nutrito.models.document_models import Document


class DocumentRepository:

    def create(self, **fields):
        document = Document(**fields)
        db.session.add(document)
        return document

    def get(self, document_id):
        return db.session.get(Document, document_id)

    def list_for_appointment(self, appointment_id):
        return (
            Document.query.filter_by(appointment_id=appointment_id)
            .order_by(Document.uploaded_at.desc())
            .all()
        )

    def list_for_patient(self, patient_id, doc_type=None, limit=20, offset=0):
        """Newest first. Returns (items, total)."""
        query = Document.query.filter_by(patient_id=patient_id)
        if doc_type:
            query = query.filter_by(type=doc_type)
        total = query.count()
        items = query.order_by(Document.uploaded_at.desc()).limit(limit).offset(offset).all()
        return items, total

    def count_for_patient(self, patient_id):
        return Document.query.filter_by(patient_id=patient_id).count()

    def delete(self, document):
        db.session.delete(document)

    def stats_by_type(self, patient_id):
        rows = (
            db.session.query(Document.type, func.count(Document.id), func.coalesce(func.sum(Document.size), 0))
            .filter(Document.patient_id == patient_id)
            .group_by(Document.type)
            .order_by(Document.type)
            .all()
        )
        return [{'type': doc_type, 'count': count, 'total_size': int(size)} for doc_type, count, size in rows]
