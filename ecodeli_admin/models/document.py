"""Document model — a generated file stored under PUBLIC_DIR/documents."""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ecodeli_admin.database import Base


class DocumentType(str, enum.Enum):
    CONTRACT = "CONTRACT"
    INVOICE = "INVOICE"
    RECEIPT = "RECEIPT"
    OTHER = "OTHER"


class Document(Base):
    __tablename__ = "documents"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )

    type: Mapped[DocumentType] = mapped_column(
        SAEnum(DocumentType, name="documenttype"), default=DocumentType.OTHER,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_path: Mapped[str] = mapped_column(String(500), nullable=False)
    file_size: Mapped[int] = mapped_column(Integer, default=0)
    mime_type: Mapped[str] = mapped_column(String(100), default="application/pdf")

    # Loose reference (e.g. "contract" + contract id)
    related_entity_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, index=True)
    related_entity_type: Mapped[str | None] = mapped_column(String(50))

    is_public: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    user = relationship("User")
