"""Tests for the Contract and User models — defaults and derived fields."""

import re
import uuid

from ecodeli_admin.models import Contract, ContractStatus, Role, User, UserType


class TestContractDefaults:
    def test_new_contract_is_draft_in_eur(self):
        c = Contract(merchant_id=uuid.uuid4(), title="T", content="C", terms="X")
        assert c.id is not None
        assert c.status == ContractStatus.DRAFT
        assert c.currency == "EUR"
        assert c.created_at is not None

    def test_number_format(self):
        c = Contract(carrier_id=uuid.uuid4(), title="T", content="C", terms="X")
        assert re.match(r"^CONT-[0-9a-f]{8}$", c.number)
        assert c.number == f"CONT-{str(c.id)[:8]}"

    def test_party_prefers_merchant(self):
        merchant = User(email="m@example.com", role=Role.MERCHANT)
        c = Contract(merchant_id=merchant.id, merchant=merchant, title="T", content="C", terms="X")
        assert c.party is merchant

    def test_party_falls_back_to_carrier(self):
        carrier = User(email="c@example.com", role=Role.CARRIER)
        c = Contract(carrier_id=carrier.id, carrier=carrier, title="T", content="C", terms="X")
        assert c.party is carrier


class TestUserDefaults:
    def test_defaults(self):
        u = User(email="someone@example.com")
        assert u.role == Role.CUSTOMER
        assert u.user_type == UserType.INDIVIDUAL
        assert u.is_verified is False

    def test_display_name_order(self):
        u = User(email="someone@example.com")
        assert u.display_name == "someone@example.com"
        u.name = "Some One"
        assert u.display_name == "Some One"
        u.first_name, u.last_name = "Jean", "Dupont"
        assert u.display_name == "Jean Dupont"
        u.company_name = "Dupont SARL"
        assert u.display_name == "Dupont SARL"
