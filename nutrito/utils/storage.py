# /nutrito/utils/storage.py
import os
import uuid

from flask import current_app
from werkzeug.utils import secure_filename


class DocumentStore:
    """Keeps uploaded document blobs in the local upload folder."""

    def __init__(self, app=None):
        if app:
            self.init_app(app)

    def init_app(self, app):
        """Create the upload folder outside of tests."""
        if not app.testing:
            os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

    def save(self, file):
        """
        Store an uploaded file under a generated name.

        Args:
            file: werkzeug FileStorage from request.files

        Returns:
            dict: 'success', 'stored_name', 'url', 'size', 'format' or 'error'
        """
        if not file or not file.filename:
            return {'success': False, 'error': 'No file provided'}

        extension = self._get_file_extension(file.filename)
        if extension not in self._allowed_types():
            return {'success': False, 'error': 'File type not allowed'}

        stored_name = secure_filename(f"{uuid.uuid4().hex}.{extension}")
        folder = self._folder()
        os.makedirs(folder, exist_ok=True)
        path = os.path.join(folder, stored_name)

        file.save(path)
        size = os.path.getsize(path)
        if size == 0:
            os.remove(path)
            return {'success': False, 'error': 'The file is empty'}

        current_app.logger.info(f"Stored document blob '{stored_name}' ({size} bytes)")
        return {
            'success': True,
            'stored_name': stored_name,
            'url': f"{current_app.config['UPLOAD_URL_PREFIX']}/{stored_name}",
            'size': size,
            'format': extension,
        }

    def path_for(self, stored_name):
        return os.path.join(self._folder(), secure_filename(stored_name))

    def exists(self, stored_name):
        return os.path.isfile(self.path_for(stored_name))

    def delete(self, stored_name):
        """
        Remove a stored blob.

        Returns:
            dict: Contains 'success' and optionally 'error'
        """
        try:
            os.remove(self.path_for(stored_name))
            return {'success': True}
        except OSError as e:
            return {'success': False, 'error': str(e)}

    def _folder(self):
        return current_app.config['UPLOAD_FOLDER']

    def _allowed_types(self):
        return {ext.lower() for ext in current_app.config['UPLOAD_ALLOWED_TYPES']}

    def _get_file_extension(self, filename):
        """Extract file extension from filename."""
        if not filename or '.' not in filename:
            return None
        return filename.rsplit('.', 1)[1].lower()


document_store = DocumentStore()
