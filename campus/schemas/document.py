"""Document set validation API schemas."""

from pydantic import BaseModel, Field


class DocumentSetValidateRequest(BaseModel):
    """Request body for POST /documents/validate. Tags are validated server-side."""

    doc_types: list[str] = Field(..., max_length=20)
    sponsored: bool = False


class DocumentSetValidateResponse(BaseModel):
    ok: bool = True
