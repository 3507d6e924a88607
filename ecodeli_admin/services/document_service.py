"""
Document generation and file storage.

Generated files live under ``PUBLIC_DIR/documents`` and are served at
``/documents/<file_name>``. A Document row is only kept when its file
was written, and a written file is removed again when its row cannot
be recorded.
"""

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ecodeli_admin.config import settings
from ecodeli_admin.core.errors import NotFoundError
from ecodeli_admin.models import Contract, Document, DocumentType, UserType
from ecodeli_admin.services.pdf_service import render_contract_pdf

logger = logging.getLogger(__name__)

DOCUMENTS_URL_PREFIX = "/documents"
CONTRACT_ENTITY = "contract"


def documents_dir() -> Path:
    return Path(settings.PUBLIC_DIR) / "documents"


def path_for_url(file_path: str) -> Path:
    """Map a stored ``/documents/<name>`` path to its location on disk."""
    return documents_dir() / Path(file_path).name


def write_file(file_name: str, data: bytes) -> Path:
    target = documents_dir()
    target.mkdir(parents=True, exist_ok=True)
    path = target / file_name
    path.write_bytes(data)
    return path


def remove_file(file_path: str) -> bool:
    """Delete the file behind a stored path; returns False if it was already gone."""
    path = path_for_url(file_path)
    try:
        path.unlink()
    except FileNotFoundError:
        logger.warning("Document file %s already missing", path)
        return False
    return True


def build_file_name(doc_type: DocumentType, contract_id: uuid.UUID, now: datetime) -> str:
    timestamp_ms = int(now.timestamp() * 1000)
    return f"{doc_type.value.lower()}_{contract_id}_{timestamp_ms}.pdf"


async def generate_contract_document(
    db: AsyncSession,
    contract_id: uuid.UUID,
    doc_type: DocumentType = DocumentType.CONTRACT,
) -> tuple[Document, Contract]:
    """
    Render a contract to PDF, store it and record a Document row.

    The contract party must be a PROFESSIONAL user; otherwise a 400 is
    raised before anything is written. The row is flushed first, the
    file written last and the transaction committed here, so the caller
    gets back a document that is both on disk and recorded.
    """
    result = await db.execute(
        select(Contract)
        .options(selectinload(Contract.merchant), selectinload(Contract.carrier))
        .where(Contract.id == contract_id)
    )
    contract = result.scalar_one_or_none()
    if contract is None:
        raise NotFoundError("Contract not found")

    party = contract.party
    if party is None:
        raise NotFoundError("Contract party not found")

    if party.user_type != UserType.PROFESSIONAL:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Documents can only be generated for professional users",
        )

    now = datetime.now(timezone.utc)
    pdf = render_contract_pdf(contract, party, generated_at=now)
    file_name = build_file_name(doc_type, contract.id, now)

    document = Document(
        user_id=party.id,
        type=doc_type,
        title=f"Contract - {contract.title}",
        description=f"Contract document {contract.number}",
        file_name=file_name,
        file_path=f"{DOCUMENTS_URL_PREFIX}/{file_name}",
        file_size=len(pdf),
        mime_type="application/pdf",
        related_entity_id=contract.id,
        related_entity_type=CONTRACT_ENTITY,
        is_public=False,
    )
    db.add(document)
    await db.flush()

    # A failed write or commit leaves neither a row nor a file.
    path = documents_dir() / file_name
    try:
        write_file(file_name, pdf)
        await db.commit()
    except Exception:
        path.unlink(missing_ok=True)
        logger.exception("Could not record document %s, file removed", file_name)
        raise

    logger.info("Document %s generated for contract %s", document.id, contract.id)
    return document, contract
