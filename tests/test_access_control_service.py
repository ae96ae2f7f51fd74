# tests/test_access_control_service.py
"""Unit tests for manual gate registration and lookups."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import SQLAlchemyError
from guardiao.constants import AccessCategory, AccessMode, GuardGate
from guardiao.schemas.access_log import AccessLogCreate
from guardiao.services.access_control_service import lookup_latest, register_access
from guardiao.services.actor import Actor
from guardiao.services.errors import StoreError

ACTOR = Actor(id="op-3", name="CB ALVES")


class TestRegisterAccess:
    def test_pedestrian_entry_drops_vehicle_fields(self):
        db = MagicMock()
        data = AccessLogCreate(
            guard_gate=GuardGate.G3, name="  maria souza ", identification=" 998877 ",
            access_mode=AccessMode.PEDESTRIAN, vehicle_model="gol", vehicle_plate="abc1d23",
        )

        entry = register_access(db, data, ACTOR)

        assert entry.name == "MARIA SOUZA"
        assert entry.identification == "998877"
        assert entry.guard_gate == "PORTÃO G3"
        assert entry.vehicle_model is None
        assert entry.vehicle_plate is None
        assert entry.registered_by == "op-3"
        db.add.assert_called_once_with(entry)
        db.commit.assert_called_once()

    def test_vehicle_exit_keeps_plate_uppercased(self):
        db = MagicMock()
        data = AccessLogCreate(name="João", access_mode=AccessMode.VEHICLE,
                               access_category=AccessCategory.EXIT, vehicle_model="gol", vehicle_plate=" abc1d23")

        entry = register_access(db, data, ACTOR)

        assert entry.access_category == "Saída"
        assert entry.vehicle_model == "GOL"
        assert entry.vehicle_plate == "ABC1D23"

    def test_store_failure_rolls_back(self):
        db = MagicMock()
        db.commit.side_effect = SQLAlchemyError("duplicate key")

        with pytest.raises(StoreError, match="duplicate key"):
            register_access(db, AccessLogCreate(name="x"), ACTOR)
        db.rollback.assert_called_once()


class TestLookupLatest:
    def test_no_key_returns_none_without_query(self):
        db = MagicMock()
        assert lookup_latest(db) is None
        db.query.assert_not_called()

    def test_plate_lookup_is_normalized(self):
        db = MagicMock()
        latest = MagicMock()
        db.query.return_value.filter.return_value.order_by.return_value.first.return_value = latest

        assert lookup_latest(db, plate=" abc1d23 ") is latest
        db.query.return_value.filter.assert_called_once()
