import random

import pytest

from courtpairing.controllers import RoundManager
from courtpairing.exceptions import (
    DuplicateParticipantException,
    InvalidConfigurationException,
    MissingContextException,
    ParticipantNotFoundException,
    RoundNotFoundException,
    TournamentStateException,
)
from courtpairing.formats import PairingFormat
from courtpairing.models import EngineConfig, Gender


def _manager(pairing_format="americano", count=6, courts=2, **kwargs):
    manager = RoundManager(pairing_format, courts, rng=random.Random(5), **kwargs)
    for i in range(1, count + 1):
        manager.add_participant(f"p{i}", gender="F" if i % 2 else "M", score=0.0)
    return manager


def test_create_and_complete_rounds():
    manager = _manager()

    proposal = manager.create_next_round()
    assert proposal.round_number == 1
    assert manager.current_round_number == 1
    assert manager.completed_rounds_count == 0

    manager.mark_round_completed(1)
    assert manager.completed_rounds_count == 1
    assert len(manager.history) == 1

    second = manager.create_next_round()
    assert second.round_number == 2


def test_round_must_be_completed_before_next():
    manager = _manager()
    manager.create_next_round()

    with pytest.raises(TournamentStateException):
        manager.create_next_round()


def test_round_limit_is_enforced():
    manager = _manager(num_rounds=1)
    manager.create_next_round()
    manager.mark_round_completed(1)

    with pytest.raises(TournamentStateException):
        manager.create_next_round()


def test_undo_last_open_round():
    manager = _manager()
    manager.create_next_round()

    removed = manager.undo_last_round()
    assert removed.round_number == 1
    assert manager.current_round_number == 0


def test_completed_round_cannot_be_undone():
    manager = _manager()
    with pytest.raises(TournamentStateException):
        manager.undo_last_round()

    manager.create_next_round()
    manager.mark_round_completed(1)
    with pytest.raises(TournamentStateException):
        manager.undo_last_round()


def test_unknown_round_cannot_be_completed():
    with pytest.raises(RoundNotFoundException):
        _manager().mark_round_completed(3)
    assert _manager().get_round(1) is None


def test_rested_players_are_picked_next_round():
    manager = _manager()
    first = manager.create_next_round()
    manager.mark_round_completed(1)

    second = manager.create_next_round()
    assert set(first.resting) <= set(second.active_pool)
    assert manager.rest_streaks() == {pid: 0 for pid in first.active_pool} | {
        pid: 1 for pid in first.resting
    }


def test_rest_limit_holds_over_a_session():
    manager = _manager(count=11, courts=2, config=EngineConfig(max_rest_streak=2))
    for number in range(1, 12):
        manager.create_next_round()
        manager.mark_round_completed(number)
        assert max(manager.rest_streaks().values()) <= 3


def test_duplicate_participant_is_rejected():
    manager = _manager()
    with pytest.raises(DuplicateParticipantException):
        manager.add_participant("p1")


def test_withdrawn_participant_is_not_scheduled():
    manager = _manager(count=4, courts=2)
    manager.withdraw_participant("p4")

    proposal = manager.create_next_round()
    assert "p4" not in proposal.active_pool
    assert manager.withdrawn == ["p4"]

    with pytest.raises(ParticipantNotFoundException):
        manager.withdraw_participant("p4")

    manager.mark_round_completed(1)
    manager.add_participant("p4")
    assert manager.withdrawn == []


def test_mixed_format_needs_every_gender():
    manager = RoundManager(PairingFormat.MIXICANO, 1)
    manager.add_participant("a", gender="F")
    manager.add_participant("b")

    with pytest.raises(MissingContextException):
        manager.create_next_round()


def test_scores_are_used_by_ranked_formats():
    manager = _manager("mexicano", count=4, courts=2)
    proposal = manager.create_next_round(scores={"p1": 1, "p2": 8, "p3": 5, "p4": 9})

    assert [m.participant_ids for m in proposal.matches] == [("p4", "p2"), ("p3", "p1")]


def test_negative_courts_are_rejected():
    with pytest.raises(InvalidConfigurationException):
        RoundManager("americano", -1)


def test_round_trip_through_dict():
    manager = _manager("super_mexicano")
    manager.create_next_round()
    manager.mark_round_completed(1)

    restored = RoundManager.from_dict(manager.to_dict())

    assert restored.pairing_format is PairingFormat.SUPER_MEXICANO
    assert restored.participants == manager.participants
    assert restored.genders["p1"] is Gender.FEMALE
    assert restored.rounds[0].is_completed
    assert [m.participant_ids for m in restored.rounds[0].matches] == [
        m.participant_ids for m in manager.rounds[0].matches
    ]
