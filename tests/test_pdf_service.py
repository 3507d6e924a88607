"""Tests for contract PDF rendering and document file helpers."""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from ecodeli_admin.config import settings
from ecodeli_admin.models import Contract, DocumentType, Role, User, UserType
from ecodeli_admin.services import document_service
from ecodeli_admin.services.pdf_service import (
    format_currency,
    format_date,
    party_display_name,
    render_contract_pdf,
)


@pytest.fixture
def party():
    return User(
        email="shop@example.com",
        role=Role.MERCHANT,
        user_type=UserType.PROFESSIONAL,
        company_name="Boutique Martin",
        company_first_name="Camille",
        company_last_name="Martin",
        address="12 Rue du Commerce, Paris",
    )


class TestFormatting:
    def test_format_currency(self):
        assert format_currency(Decimal("1234.5")) == "1,234.50 EUR"
        assert format_currency(12, "USD") == "12.00 USD"
        assert format_currency(None) == "-"

    def test_format_date(self):
        assert format_date(datetime(2026, 1, 5, tzinfo=timezone.utc)) == "05 January 2026"
        assert format_date(None) == "-"

    def test_party_display_name(self, party):
        assert party_display_name(party) == "Boutique Martin"
        person = User(email="p@example.com", first_name="Jean", last_name="Dupont")
        assert party_display_name(person) == "Jean Dupont"
        assert party_display_name(User(email="only@example.com")) == "only@example.com"


class TestRenderContract:
    def test_renders_pdf_bytes(self, party):
        contract = Contract(
            merchant_id=party.id, title="Partnership", content="Short content.",
            terms="Net 30", value=Decimal("1500"),
        )
        pdf = render_contract_pdf(contract, party)
        assert pdf.startswith(b"%PDF")
        assert pdf.rstrip().endswith(b"%%EOF")

    def test_long_contract_spans_pages(self, party):
        short = Contract(merchant_id=party.id, title="T", content="Line", terms="Net 30")
        long = Contract(
            merchant_id=party.id, title="T",
            content="\n".join(f"Clause {i}: " + "lorem ipsum " * 20 for i in range(120)),
            terms="Net 30",
        )
        short_pdf = render_contract_pdf(short, party)
        long_pdf = render_contract_pdf(long, party)
        assert long_pdf.count(b"/Type /Page") > short_pdf.count(b"/Type /Page")


class TestDocumentFiles:
    def test_build_file_name(self):
        contract_id = uuid.UUID("12345678-1234-5678-1234-567812345678")
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        name = document_service.build_file_name(DocumentType.CONTRACT, contract_id, now)
        assert name == f"contract_{contract_id}_{int(now.timestamp() * 1000)}.pdf"

    def test_write_and_remove(self, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "PUBLIC_DIR", str(tmp_path))
        path = document_service.write_file("a.pdf", b"%PDF")
        assert path == tmp_path / "documents" / "a.pdf"
        assert document_service.remove_file("/documents/a.pdf") is True
        assert not path.exists()
        assert document_service.remove_file("/documents/a.pdf") is False
