# tests/test_occurrence_service.py
"""Unit tests for occurrence persistence: registration, dispatch, notes and edits."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import MagicMock
from datetime import datetime, timedelta
from sqlalchemy.exc import SQLAlchemyError
from guardiao.constants import AccessLevel, Urgency
from guardiao.models.occurrence import Occurrence, TimelineEntry
from guardiao.schemas.occurrence import OccurrenceCreate
from guardiao.services.actor import Actor
from guardiao.services.errors import NotFoundError, StoreError
from guardiao.services.occurrence_service import (
    REGISTERED_COMMENT,
    add_note,
    create_occurrence,
    edit_occurrence,
    transition_occurrence,
)
from guardiao.services.occurrence_workflow import Status, TransitionRejected

N1 = Actor(id="n1", name="TEN ADJUNTO", is_admin=True, access_level=AccessLevel.N1)
N2 = Actor(id="n2", name="CAP CI", is_admin=True, access_level=AccessLevel.N2)
OPERATOR = Actor(id="op", name="SD SOUZA")


def make_occurrence(status=Status.REGISTERED, sector=None, last_entry_at=None):
    occurrence = Occurrence(
        id=1, title="Portão forçado", type="Arrombamento", category="Segurança Orgânica / Patrimonial",
        urgency="Alta", status=status.value, date=datetime.utcnow(), location="PORTÃO G2",
        description="Cadeado rompido", creator="SD SOUZA", sector=sector,
    )
    occurrence.timeline.append(TimelineEntry(
        status=status.value, updated_by="SD SOUZA", comment=REGISTERED_COMMENT,
        timestamp=last_entry_at or datetime.utcnow() - timedelta(minutes=5),
    ))
    return occurrence


def db_with(occurrence):
    db = MagicMock()
    db.query.return_value.filter.return_value.first.return_value = occurrence
    return db


class TestCreateOccurrence:
    def test_starts_registered_with_one_entry(self):
        db = MagicMock()
        data = OccurrenceCreate(title="Câmera inoperante", type="Câmera inoperante",
                                category="Segurança de Sistemas e Tecnologia", urgency=Urgency.LOW)

        occurrence = create_occurrence(db, data, OPERATOR)

        assert occurrence.status == Status.REGISTERED.value
        assert occurrence.creator == "SD SOUZA"
        assert len(occurrence.timeline) == 1
        assert occurrence.timeline[0].comment == REGISTERED_COMMENT
        db.add.assert_called_once_with(occurrence)
        db.commit.assert_called_once()

    def test_store_failure_is_reported(self):
        db = MagicMock()
        db.commit.side_effect = SQLAlchemyError("disk full")
        data = OccurrenceCreate(title="x", type="Furto", category="Segurança Orgânica / Patrimonial")

        with pytest.raises(StoreError, match="disk full"):
            create_occurrence(db, data, OPERATOR)
        db.rollback.assert_called_once()


class TestTransitionOccurrence:
    def test_appends_entry_and_updates_status(self):
        occurrence = make_occurrence()
        db = db_with(occurrence)

        transition_occurrence(db, 1, N1, Status.TRIAGE)

        assert occurrence.status == Status.TRIAGE.value
        assert [e.status for e in occurrence.timeline] == [Status.REGISTERED.value, Status.TRIAGE.value]
        assert occurrence.timeline[-1].updated_by == "TEN ADJUNTO"
        db.commit.assert_called_once()

    def test_timestamps_strictly_increase(self):
        # Last entry recorded in the future (clock skew): the new one must still come after it
        future = datetime.utcnow() + timedelta(hours=1)
        occurrence = make_occurrence(last_entry_at=future)
        db = db_with(occurrence)

        transition_occurrence(db, 1, N1, Status.TRIAGE)
        transition_occurrence(db, 1, N1, Status.ESCALATED)

        stamps = [e.timestamp for e in occurrence.timeline]
        assert stamps == sorted(stamps)
        assert len(set(stamps)) == 3

    def test_rejection_leaves_occurrence_untouched(self):
        occurrence = make_occurrence(status=Status.ESCALATED)
        db = db_with(occurrence)

        with pytest.raises(TransitionRejected) as exc:
            transition_occurrence(db, 1, N2, Status.RESOLVED)

        assert exc.value.reason == TransitionRejected.SECTOR_REQUIRED
        assert occurrence.status == Status.ESCALATED.value
        assert len(occurrence.timeline) == 1
        db.commit.assert_not_called()

    def test_sector_on_record_unlocks_n3(self):
        occurrence = make_occurrence(status=Status.ESCALATED, sector="EPA-SEÇÃO")
        db = db_with(occurrence)

        transition_occurrence(db, 1, N2, Status.RESOLVED)

        assert occurrence.status == Status.RESOLVED.value
        assert "EPA-SEÇÃO" in occurrence.timeline[-1].comment

    def test_closed_occurrence_cannot_move(self):
        occurrence = make_occurrence(status=Status.CLOSED)
        db = db_with(occurrence)

        with pytest.raises(TransitionRejected) as exc:
            transition_occurrence(db, 1, N2, Status.TRIAGE)
        assert exc.value.reason == TransitionRejected.CLOSED
        assert len(occurrence.timeline) == 1

    def test_unknown_occurrence(self):
        with pytest.raises(NotFoundError):
            transition_occurrence(db_with(None), 99, N1, Status.TRIAGE)


class TestNotesAndEdits:
    def test_note_keeps_status(self):
        occurrence = make_occurrence(status=Status.TRIAGE)
        db = db_with(occurrence)

        add_note(db, 1, OPERATOR, "  Ronda reforçada no local.  ")

        assert occurrence.status == Status.TRIAGE.value
        assert occurrence.timeline[-1].status == Status.TRIAGE.value
        assert occurrence.timeline[-1].comment == "Ronda reforçada no local."

    def test_note_on_closed_occurrence_is_refused(self):
        occurrence = make_occurrence(status=Status.CLOSED)
        with pytest.raises(TransitionRejected):
            add_note(db_with(occurrence), 1, N1, "tarde demais")

    def test_edit_changes_fields_without_timeline_entry(self):
        occurrence = make_occurrence(status=Status.ESCALATED)
        db = db_with(occurrence)

        edit_occurrence(db, 1, N2, {"sector": "CANIL", "urgency": Urgency.CRITICAL, "status": "forjado"})

        assert occurrence.sector == "CANIL"
        assert occurrence.urgency == "Crítica"
        assert occurrence.status == Status.ESCALATED.value
        assert len(occurrence.timeline) == 1
        db.commit.assert_called_once()

    def test_edit_requires_admin(self):
        occurrence = make_occurrence()
        with pytest.raises(TransitionRejected) as exc:
            edit_occurrence(db_with(occurrence), 1, OPERATOR, {"title": "novo"})
        assert exc.value.reason == TransitionRejected.NOT_ADMIN
