"""
Document endpoints — list generated documents, generate a contract PDF,
and delete a document with its file.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ecodeli_admin.core.errors import NotFoundError
from ecodeli_admin.database import get_db
from ecodeli_admin.models import Contract, Document, DocumentType
from ecodeli_admin.schemas.common import MessageResponse
from ecodeli_admin.schemas.document import DocumentCreateRequest, DocumentResponse, RelatedEntity
from ecodeli_admin.services import document_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _build_response(document: Document, contract: Contract | None) -> DocumentResponse:
    response = DocumentResponse.model_validate(document)
    if contract is None:
        return response
    return response.model_copy(update={"related_entity": RelatedEntity.model_validate(contract)})


@router.get("", response_model=list[DocumentResponse])
async def list_documents(
    user_id: UUID | None = Query(None, alias="userId"),
    doc_type: DocumentType | None = Query(None, alias="type"),
    related_entity_type: str | None = Query(None, alias="relatedEntityType"),
    db: AsyncSession = Depends(get_db),
):
    """List documents newest first; contract documents carry their contract summary."""
    query = select(Document).options(selectinload(Document.user))
    if user_id is not None:
        query = query.where(Document.user_id == user_id)
    if doc_type is not None:
        query = query.where(Document.type == doc_type)
    if related_entity_type:
        query = query.where(Document.related_entity_type == related_entity_type)
    documents = (await db.execute(query.order_by(Document.created_at.desc()))).scalars().all()

    contract_ids = {
        d.related_entity_id for d in documents
        if d.related_entity_type == document_service.CONTRACT_ENTITY and d.related_entity_id
    }
    contracts: dict[UUID, Contract] = {}
    if contract_ids:
        result = await db.execute(select(Contract).where(Contract.id.in_(contract_ids)))
        contracts = {c.id: c for c in result.scalars().all()}

    return [_build_response(d, contracts.get(d.related_entity_id)) for d in documents]


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(payload: DocumentCreateRequest, db: AsyncSession = Depends(get_db)):
    """
    Generate the PDF for a contract and record it as a document.

    Only contracts whose party is a PROFESSIONAL user can be rendered.
    """
    document, contract = await document_service.generate_contract_document(
        db, payload.contract_id, payload.type,
    )
    await db.refresh(document, attribute_names=["user"])
    return _build_response(document, contract)


@router.delete("", response_model=MessageResponse)
async def delete_document(
    document_id: UUID = Query(..., alias="id"),
    db: AsyncSession = Depends(get_db),
):
    """Delete a document row and its file, if the file still exists."""
    document = await db.get(Document, document_id)
    if document is None:
        raise NotFoundError("Document not found")

    file_path = document.file_path
    await db.delete(document)
    await db.flush()
    document_service.remove_file(file_path)

    logger.info("Document %s deleted", document_id)
    return MessageResponse(message="Document deleted")
