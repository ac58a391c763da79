from typing import BinaryIO

import cloudinary
import cloudinary.uploader
import cloudinary.exceptions
import structlog

from ..application.interfaces import IDocumentUploader
from ..config import Settings
from ..domain.errors import UploadError

logger = structlog.get_logger()


class CloudinaryDocumentUploader(IDocumentUploader):
    """
    Stores credential documents on Cloudinary and returns their HTTPS URL.

    PDFs and images share one folder; ``resource_type="auto"`` lets Cloudinary
    classify each file.
    """

    def __init__(self, cloud_name: str | None, api_key: str | None,
                 api_secret: str | None, folder: str):
        self.folder = folder
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "CloudinaryDocumentUploader":
        return cls(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            folder=settings.UPLOAD_FOLDER,
        )

    def upload(self, file: BinaryIO, filename: str) -> str:
        try:
            result = cloudinary.uploader.upload(
                file,
                folder=self.folder,
                resource_type="auto",
                filename_override=filename,
            )
        except cloudinary.exceptions.Error as e:
            logger.error("document_upload_failed", filename=filename, error=str(e))
            raise UploadError(f"Cloudinary rejected the upload: {e}") from e

        secure_url = result.get("secure_url")
        if not secure_url:
            logger.error("document_upload_failed", filename=filename, error="no secure_url in result")
            raise UploadError("Cloudinary upload result did not contain a secure_url")
        logger.info("document_uploaded", filename=filename, url=secure_url)
        return secure_url
