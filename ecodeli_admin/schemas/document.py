"""
Pydantic schemas for generated documents.
"""

from datetime import datetime
from uuid import UUID

from ecodeli_admin.models.contract import ContractStatus
from ecodeli_admin.models.document import DocumentType
from ecodeli_admin.schemas.common import CamelModel, UserSummary


class DocumentCreateRequest(CamelModel):
    contract_id: UUID
    type: DocumentType = DocumentType.CONTRACT


class RelatedEntity(CamelModel):
    id: UUID
    title: str
    status: ContractStatus


class DocumentResponse(CamelModel):
    id: UUID
    user_id: UUID
    type: DocumentType
    title: str
    description: str | None
    file_name: str
    file_path: str
    file_size: int
    mime_type: str
    related_entity_id: UUID | None
    related_entity_type: str | None
    is_public: bool
    created_at: datetime
    user: UserSummary | None = None
    related_entity: RelatedEntity | None = None
