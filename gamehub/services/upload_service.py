"""Storage of user-uploaded profile images."""
import logging
import os
import random
import time

from ..errors import ValidationError

logger = logging.getLogger('gamehub.service.uploads')

DEFAULT_MAX_BYTES = 5 * 1024 * 1024


class UploadService:
    """Validates image uploads and stores them under *upload_dir*.

    Files are renamed to ``<epoch-ms>-<random>.<ext>`` and addressed by the
    URL path ``/uploads/<name>``.
    """

    URL_PREFIX = '/uploads/'

    def __init__(self, upload_dir: str, max_bytes: int = DEFAULT_MAX_BYTES) -> None:
        self.upload_dir = upload_dir
        self.max_bytes = max_bytes
        os.makedirs(upload_dir, exist_ok=True)

    @staticmethod
    def _filename(original: str) -> str:
        ext = os.path.splitext(original or '')[1].lower()
        return f'{int(time.time() * 1000)}-{random.randint(0, 10 ** 9 - 1)}{ext}'

    def save_image(self, storage) -> str:
        """Persist a werkzeug ``FileStorage`` and return its URL path.

        Raises:
            ValidationError: no file, a non-image mimetype, or a file larger
                than ``max_bytes``.
        """
        if storage is None or not storage.filename:
            raise ValidationError('No file uploaded')
        if not (storage.mimetype or '').startswith('image/'):
            raise ValidationError('Only image files are allowed!')
        data = storage.stream.read(self.max_bytes + 1)
        if len(data) > self.max_bytes:
            raise ValidationError('File too large')
        name = self._filename(storage.filename)
        with open(os.path.join(self.upload_dir, name), 'wb') as fh:
            fh.write(data)
        logger.info('Stored upload %s (%d bytes)', name, len(data))
        return self.URL_PREFIX + name
