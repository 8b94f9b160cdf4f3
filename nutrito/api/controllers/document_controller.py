from flask import request, current_app, send_file
from nutrito.services.document_service import DocumentService
from nutrito.utils.decorators import current_session
from nutrito.utils.responses import success_response, page_response
from nutrito.utils.validators import (
    require_uuid, validate_document_upload, validate_document_type, validate_pagination
)

def _service():
    return DocumentService(
        current_session(),
        default_limit=current_app.config['DEFAULT_PAGE_LIMIT'],
        max_limit=current_app.config['MAX_PAGE_LIMIT'],
    )

def attach_document(appointment_id):
    """Upload a file for an appointment of the caller."""
    appointment_id = require_uuid(appointment_id)
    data = validate_document_upload(request.form, request.files)
    document = _service().attach(appointment_id, data['file'], data['display_name'], data['doc_type'])
    return success_response(document.to_dict(), status=201, message='Document attached successfully')

def appointment_documents(appointment_id):
    documents = _service().list_for_appointment(require_uuid(appointment_id))
    return success_response([document.to_dict() for document in documents])

def download_document(document_id):
    document, path = _service().file_for_download(require_uuid(document_id))
    extension = document.stored_filename.rsplit('.', 1)[-1]
    download_name = document.display_name
    if not download_name.lower().endswith(f'.{extension}'):
        download_name = f'{download_name}.{extension}'
    return send_file(path, as_attachment=True, download_name=download_name)

def delete_document(document_id):
    _service().delete(require_uuid(document_id))
    return success_response(None, message='Document deleted successfully')

def my_documents():
    doc_type = validate_document_type(request.args)
    limit, offset = validate_pagination(request.args, current_app.config['DEFAULT_PAGE_LIMIT'])
    page = _service().mine(doc_type, limit, offset)
    return page_response(page, lambda document: document.to_dict())

def document_stats():
    return success_response(_service().stats())
