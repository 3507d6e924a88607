"""Tests for the Match model — defaults and the status lifecycle table."""

import uuid
from decimal import Decimal

import pytest

from ecodeli_admin.core.errors import InvalidTransitionError
from ecodeli_admin.models.match import (
    Match,
    MatchStatus,
    TERMINAL_STATUSES,
    VALID_TRANSITIONS,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def match():
    """Create a minimal Match instance."""
    return Match(
        package_id=uuid.uuid4(),
        ride_id=uuid.uuid4(),
        price=Decimal("18.50"),
    )


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------


class TestMatchCreation:
    def test_defaults(self, match):
        """A new match is PROPOSED with an id and timestamps."""
        assert match.id is not None
        assert match.status == MatchStatus.PROPOSED
        assert match.created_at is not None
        assert match.updated_at is not None
        assert match.is_terminal is False

    def test_repr_contains_status(self, match):
        assert "PROPOSED" in repr(match)


# ---------------------------------------------------------------------------
# Status Transitions
# ---------------------------------------------------------------------------


class TestStatusTransitions:
    def test_sender_acceptance_then_confirmation(self, match):
        match.transition_to(MatchStatus.ACCEPTED_BY_SENDER)
        match.transition_to(MatchStatus.CONFIRMED)
        assert match.status == MatchStatus.CONFIRMED
        assert match.is_terminal

    def test_carrier_acceptance_then_confirmation(self, match):
        match.transition_to(MatchStatus.ACCEPTED_BY_CARRIER)
        match.transition_to(MatchStatus.CONFIRMED)
        assert match.status == MatchStatus.CONFIRMED

    def test_proposed_to_rejected(self, match):
        match.transition_to(MatchStatus.REJECTED)
        assert match.status == MatchStatus.REJECTED

    @pytest.mark.parametrize("start", [
        MatchStatus.PROPOSED,
        MatchStatus.ACCEPTED_BY_SENDER,
        MatchStatus.ACCEPTED_BY_CARRIER,
    ])
    def test_cancel_before_confirmation(self, start):
        m = Match(package_id=uuid.uuid4(), ride_id=uuid.uuid4(), status=start)
        m.transition_to(MatchStatus.CANCELLED)
        assert m.status == MatchStatus.CANCELLED

    def test_transition_touches_updated_at(self, match):
        before = match.updated_at
        match.transition_to(MatchStatus.ACCEPTED_BY_SENDER)
        assert match.updated_at >= before

    def test_proposed_cannot_jump_to_confirmed(self, match):
        with pytest.raises(InvalidTransitionError):
            match.transition_to(MatchStatus.CONFIRMED)
        assert match.status == MatchStatus.PROPOSED

    def test_accepted_cannot_be_rejected(self, match):
        match.transition_to(MatchStatus.ACCEPTED_BY_CARRIER)
        with pytest.raises(InvalidTransitionError):
            match.transition_to(MatchStatus.REJECTED)

    def test_same_status_write_is_refused(self, match):
        with pytest.raises(InvalidTransitionError):
            match.transition_to(MatchStatus.PROPOSED)

    @pytest.mark.parametrize("terminal", sorted(TERMINAL_STATUSES, key=lambda s: s.value))
    def test_terminal_states_refuse_every_move(self, terminal):
        m = Match(package_id=uuid.uuid4(), ride_id=uuid.uuid4(), status=terminal)
        for target in MatchStatus:
            with pytest.raises(InvalidTransitionError):
                m.transition_to(target)
        assert m.status == terminal

    def test_error_carries_both_states(self, match):
        match.transition_to(MatchStatus.REJECTED)
        with pytest.raises(InvalidTransitionError) as exc_info:
            match.transition_to(MatchStatus.ACCEPTED_BY_SENDER)
        assert exc_info.value.details == {"from": "REJECTED", "to": "ACCEPTED_BY_SENDER"}
        assert exc_info.value.status_code == 409


class TestTransitionTable:
    def test_every_status_has_an_entry(self):
        assert set(VALID_TRANSITIONS) == set(MatchStatus)

    def test_terminal_statuses(self):
        assert TERMINAL_STATUSES == {
            MatchStatus.CONFIRMED,
            MatchStatus.REJECTED,
            MatchStatus.CANCELLED,
        }

    def test_no_status_transitions_to_itself(self):
        for status, targets in VALID_TRANSITIONS.items():
            assert status not in targets
