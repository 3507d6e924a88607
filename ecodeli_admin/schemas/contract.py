"""
Pydantic schemas for contracts and the documents attached to them.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import Field, model_validator

from ecodeli_admin.models.contract import ContractStatus
from ecodeli_admin.models.document import DocumentType
from ecodeli_admin.schemas.common import CamelModel, UserSummary


class ContractCreateRequest(CamelModel):
    """A contract is bound to exactly one professional party."""
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    terms: str = Field(..., min_length=1)
    merchant_id: UUID | None = None
    carrier_id: UUID | None = None
    value: Decimal | None = Field(None, ge=0)
    currency: str = Field("EUR", min_length=3, max_length=3)
    start_date: datetime | None = None
    end_date: datetime | None = None
    expires_at: datetime | None = None

    @model_validator(mode="after")
    def check_single_party(self):
        if (self.merchant_id is None) == (self.carrier_id is None):
            raise ValueError("Exactly one of merchantId or carrierId is required")
        return self


class ContractUpdateRequest(CamelModel):
    id: UUID
    status: ContractStatus | None = None
    signed_at: datetime | None = None
    value: Decimal | None = Field(None, ge=0)
    expires_at: datetime | None = None


class ContractDocument(CamelModel):
    id: UUID
    type: DocumentType
    title: str
    file_name: str
    file_path: str
    file_size: int
    created_at: datetime


class ContractResponse(CamelModel):
    id: UUID
    number: str
    title: str
    content: str
    terms: str
    value: Decimal | None
    currency: str
    status: ContractStatus
    merchant_id: UUID | None
    carrier_id: UUID | None
    merchant: UserSummary | None = None
    carrier: UserSummary | None = None
    start_date: datetime | None
    end_date: datetime | None
    expires_at: datetime | None
    signed_at: datetime | None
    created_at: datetime
    updated_at: datetime | None
    documents: list[ContractDocument] = []
