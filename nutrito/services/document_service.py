# /nutrito/services/document_service.py
import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError

from nutrito.extensions import db
from nutrito.repositories.appointment_repository import AppointmentRepository
from nutrito.repositories.document_repository import DocumentRepository
from nutrito.services.errors import (
    AccessDenied, AppointmentNotFound, DocumentNotFound, StoredFileNotFound, ValidationError
)
from nutrito.utils.pagination import Page, clamp_window
from nutrito.utils.storage import document_store

logger = logging.getLogger(__name__)


class DocumentService:
    """Documents attached to appointments. Visible to the owning patient or an admin."""

    def __init__(self, session, documents=None, appointments=None, store=None,
                 default_limit=20, max_limit=100):
        self.session = session
        self.documents = documents or DocumentRepository()
        self.appointments = appointments or AppointmentRepository()
        self.store = store or document_store
        self.default_limit = default_limit
        self.max_limit = max_limit

    def attach(self, appointment_id, file, display_name, doc_type):
        appointment = self._owned_appointment(appointment_id)

        result = self.store.save(file)
        if not result['success']:
            raise ValidationError.for_field('archivo', result['error'])

        try:
            document = self.documents.create(
                id=str(uuid.uuid4()),
                patient_id=appointment.patient_id,
                appointment_id=appointment.id,
                stored_filename=result['stored_name'],
                display_name=display_name or file.filename,
                url=result['url'],
                type=doc_type,
                size=result['size'],
            )
            document_id = document.id
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            # Do not leave an orphan blob behind
            self.store.delete(result['stored_name'])
            raise

        logger.info("Document %s attached to appointment %s", document_id, appointment_id)
        return self.documents.get(document_id)

    def list_for_appointment(self, appointment_id):
        self._owned_appointment(appointment_id)
        return self.documents.list_for_appointment(appointment_id)

    def get(self, document_id):
        document = self.documents.get(document_id)
        if document is None:
            raise DocumentNotFound()
        if not self.session.can_access_patient(document.patient_id):
            raise AccessDenied()
        return document

    def file_for_download(self, document_id):
        """Returns (document, absolute path). The record can outlive its blob."""
        document = self.get(document_id)
        if not self.store.exists(document.stored_filename):
            logger.warning("Blob %s of document %s is missing", document.stored_filename, document_id)
            raise StoredFileNotFound()
        return document, self.store.path_for(document.stored_filename)

    def delete(self, document_id):
        """Remove the blob when possible, then the record."""
        document = self.get(document_id)

        removal = self.store.delete(document.stored_filename)
        if not removal['success']:
            logger.warning(
                "Could not remove blob %s of document %s: %s",
                document.stored_filename, document_id, removal.get('error'),
            )

        self.documents.delete(document)
        db.session.commit()
        logger.info("Document %s deleted by %s", document_id, self.session.user_id)

    def mine(self, doc_type=None, limit=None, offset=0):
        limit, offset = clamp_window(limit, offset, self.default_limit, self.max_limit)
        items, total = self.documents.list_for_patient(self.session.user_id, doc_type, limit, offset)
        return Page(items=items, total=total, limit=limit, offset=offset)

    def stats(self):
        by_type = self.documents.stats_by_type(self.session.user_id)
        return {
            'by_type': by_type,
            'total_documents': sum(row['count'] for row in by_type),
            'total_size': sum(row['total_size'] for row in by_type),
        }

    def _owned_appointment(self, appointment_id):
        appointment = self.appointments.get(appointment_id)
        if appointment is None:
            raise AppointmentNotFound()
        if not self.session.can_access_patient(appointment.patient_id):
            raise AccessDenied()
        return appointment
