"""
Contract endpoints — list, create, update and delete professional contracts.

A contract binds the company to exactly one PROFESSIONAL user, either a
merchant or a carrier. New contracts start in PENDING_SIGNATURE; only
DRAFT contracts can be deleted, together with their generated documents.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ecodeli_admin.core.errors import NotFoundError
from ecodeli_admin.database import get_db
from ecodeli_admin.models import Contract, ContractStatus, Document, User, UserType
from ecodeli_admin.schemas.common import MessageResponse
from ecodeli_admin.schemas.contract import (
    ContractCreateRequest,
    ContractDocument,
    ContractResponse,
    ContractUpdateRequest,
)
from ecodeli_admin.services import document_service

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _documents_by_contract(
    db: AsyncSession, contract_ids: list[UUID],
) -> dict[UUID, list[Document]]:
    grouped: dict[UUID, list[Document]] = {cid: [] for cid in contract_ids}
    if not contract_ids:
        return grouped
    result = await db.execute(
        select(Document)
        .where(
            Document.related_entity_type == document_service.CONTRACT_ENTITY,
            Document.related_entity_id.in_(contract_ids),
        )
        .order_by(Document.created_at.desc())
    )
    for doc in result.scalars().all():
        grouped[doc.related_entity_id].append(doc)
    return grouped


def _build_response(contract: Contract, documents: list[Document]) -> ContractResponse:
    response = ContractResponse.model_validate(contract)
    return response.model_copy(
        update={"documents": [ContractDocument.model_validate(d) for d in documents]}
    )


async def _load_contract(db: AsyncSession, contract_id: UUID) -> Contract:
    result = await db.execute(
        select(Contract)
        .options(selectinload(Contract.merchant), selectinload(Contract.carrier))
        .where(Contract.id == contract_id)
    )
    contract = result.scalar_one_or_none()
    if contract is None:
        raise NotFoundError("Contract not found")
    return contract


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("", response_model=list[ContractResponse])
async def list_contracts(
    status_filter: ContractStatus | None = Query(None, alias="status"),
    merchant_id: UUID | None = Query(None, alias="merchantId"),
    carrier_id: UUID | None = Query(None, alias="carrierId"),
    limit: int | None = Query(None, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    """List contracts newest first, each with its generated documents."""
    query = select(Contract).options(
        selectinload(Contract.merchant), selectinload(Contract.carrier),
    )
    if status_filter is not None:
        query = query.where(Contract.status == status_filter)
    if merchant_id is not None:
        query = query.where(Contract.merchant_id == merchant_id)
    if carrier_id is not None:
        query = query.where(Contract.carrier_id == carrier_id)
    query = query.order_by(Contract.created_at.desc())
    if limit:
        query = query.limit(limit)

    contracts = (await db.execute(query)).scalars().all()
    documents = await _documents_by_contract(db, [c.id for c in contracts])
    return [_build_response(c, documents[c.id]) for c in contracts]


@router.post("", response_model=ContractResponse, status_code=status.HTTP_201_CREATED)
async def create_contract(payload: ContractCreateRequest, db: AsyncSession = Depends(get_db)):
    """
    Create a contract for a PROFESSIONAL merchant or carrier.

    The new contract is PENDING_SIGNATURE and has no documents yet.
    """
    party_id = payload.merchant_id or payload.carrier_id
    party = await db.get(User, party_id)
    if party is None:
        raise NotFoundError("User not found")
    if party.user_type != UserType.PROFESSIONAL:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Contracts can only be created for PROFESSIONAL users",
        )

    contract = Contract(
        merchant_id=payload.merchant_id,
        carrier_id=payload.carrier_id,
        title=payload.title,
        content=payload.content,
        terms=payload.terms,
        value=payload.value,
        currency=payload.currency,
        status=ContractStatus.PENDING_SIGNATURE,
        start_date=payload.start_date,
        end_date=payload.end_date,
        expires_at=payload.expires_at,
    )
    db.add(contract)
    await db.flush()
    await db.refresh(contract, attribute_names=["merchant", "carrier"])

    logger.info("Contract %s created for user %s", contract.id, party.id)
    return _build_response(contract, [])


@router.put("", response_model=ContractResponse)
async def update_contract(payload: ContractUpdateRequest, db: AsyncSession = Depends(get_db)):
    """Update a contract's status, signature date, value or expiry."""
    contract = await _load_contract(db, payload.id)

    changes = payload.model_dump(exclude_unset=True, exclude={"id"})
    for field, value in changes.items():
        setattr(contract, field, value)
    await db.flush()

    logger.info("Contract %s updated (%s)", contract.id, ", ".join(sorted(changes)) or "no changes")
    documents = await _documents_by_contract(db, [contract.id])
    return _build_response(contract, documents[contract.id])


@router.delete("", response_model=MessageResponse)
async def delete_contract(
    contract_id: UUID = Query(..., alias="id"),
    db: AsyncSession = Depends(get_db),
):
    """Delete a DRAFT contract along with its document rows and files."""
    contract = await db.get(Contract, contract_id)
    if contract is None:
        raise NotFoundError("Contract not found")
    if contract.status != ContractStatus.DRAFT:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only DRAFT contracts can be deleted",
        )

    documents = (await _documents_by_contract(db, [contract.id]))[contract.id]
    if documents:
        await db.execute(
            delete(Document).where(Document.id.in_([d.id for d in documents]))
        )
    await db.delete(contract)
    await db.flush()

    for doc in documents:
        document_service.remove_file(doc.file_path)

    logger.info("Contract %s deleted with %d documents", contract_id, len(documents))
    return MessageResponse(message="Contract deleted")
