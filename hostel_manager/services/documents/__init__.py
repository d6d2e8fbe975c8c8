from hostel_manager.services.documents.document_service import (
    RESIDENT_DOCUMENT_KINDS,
    DocumentService,
    GeneratedDocument,
)
from hostel_manager.services.documents.pdf_service import PdfService

__all__ = ["PdfService", "DocumentService", "GeneratedDocument", "RESIDENT_DOCUMENT_KINDS"]
