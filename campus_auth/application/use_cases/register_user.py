from datetime import timedelta

import structlog

from ...domain.entities import Role
from ...domain.errors import InvalidInput, MissingDocument, ServerError, UnsupportedMediaType
from ..dto import RegisterUserInput, RegistrationResult, UploadedDocument
from ..interfaces import IDocumentUploader, IIdentityRepository, IPasswordHasher, ITokenIssuer

logger = structlog.get_logger()

ALLOWED_EXTENSIONS = ("pdf", "png", "jpeg", "jpg")
REQUIRED_FIELDS = ("name", "surname", "email", "password", "role")


class RegisterUser:
    def __init__(self, repo: IIdentityRepository, hasher: IPasswordHasher,
                 tokens: ITokenIssuer, uploader: IDocumentUploader,
                 token_ttl: timedelta = timedelta(hours=1)):
        self.repo = repo
        self.hasher = hasher
        self.tokens = tokens
        self.uploader = uploader
        self.token_ttl = token_ttl

    def execute(self, data: RegisterUserInput, document: UploadedDocument | None) -> RegistrationResult:
        role = self._validate(data, document)

        try:
            document_url = self.uploader.upload(document.file, document.filename)
        except Exception as e:
            logger.error("registration_failed", step="upload", error=str(e), exc_info=True)
            raise ServerError() from e

        try:
            password_hash = self.hasher.hash(data.password)
            identity = self.repo.create(
                role,
                name=data.name,
                surname=data.surname,
                email=data.email,
                password_hash=password_hash,
                document_url=document_url,
            )
        except Exception as e:
            # Upload and insert are not transactional: the document stays in storage.
            logger.error("document_orphaned", document_url=document_url, error=str(e), exc_info=True)
            raise ServerError() from e

        try:
            token = self.tokens.issue({"id": identity.id, "role": role.value}, self.token_ttl)
        except Exception as e:
            logger.error("registration_failed", step="token", identity_id=identity.id,
                         error=str(e), exc_info=True)
            raise ServerError() from e

        logger.info("registration_succeeded", identity_id=identity.id, role=role.value)
        return RegistrationResult(
            message=f"{role.value.capitalize()} registered successfully",
            identity=identity,
            token=token,
            document_url=document_url,
        )

    @staticmethod
    def _validate(data: RegisterUserInput, document: UploadedDocument | None) -> Role:
        """Reject bad input before any external call is made."""
        missing = [f for f in REQUIRED_FIELDS if not (getattr(data, f) or "").strip()]
        if missing:
            raise InvalidInput("All fields are required.")

        role = Role.parse(data.role)
        if role is None:
            raise InvalidInput("Invalid user type.")

        if document is None or not document.filename:
            raise MissingDocument("No file was uploaded.")

        if document.extension not in ALLOWED_EXTENSIONS:
            raise UnsupportedMediaType(
                "File extension not allowed. Allowed extensions: PDF, PNG, JPEG and JPG."
            )
        return role
