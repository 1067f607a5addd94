"""Document set validation for the upload form."""

from typing import Annotated

from fastapi import APIRouter, Depends

from campus.api.v1.dependencies import get_identity_id
from campus.application.services.document_set_policy import validate_document_set
from campus.schemas.document import (
    DocumentSetValidateRequest,
    DocumentSetValidateResponse,
)

router = APIRouter()


@router.post("/validate", response_model=DocumentSetValidateResponse)
async def validate_documents(
    body: DocumentSetValidateRequest,
    _: Annotated[str, Depends(get_identity_id)],
) -> DocumentSetValidateResponse:
    """Return ok, or 422 with the first failing rule's reason."""
    validate_document_set(body.doc_types, sponsored=body.sponsored)
    return DocumentSetValidateResponse()
