# tests/test_access_import_parser.py
"""Unit tests for the pasted-spreadsheet access log parser."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import datetime
from guardiao.constants import AccessCategory, Characteristic, GuardGate
from guardiao.services.access_import_parser import (
    EXPORT_HEADER,
    export_access_logs,
    normalize_category,
    normalize_characteristic,
    normalize_gate,
    parse_access_log_text,
    parse_timestamp,
    resolve_columns,
)

NOW = datetime(2026, 3, 10, 8, 0, 0)

FORM_HEADER = "\t".join([
    "Carimbo de data/hora", "Nº GUARDA/PORTÃO", "Nome completo", "Caracteristica",
    "Identidade", "Forma de ingresso", "Categoria", "Placa", "Destino", "Autorizado por",
])


def row(*cells):
    return "\t".join(cells)


class TestResolveColumns:
    def test_header_keywords_match_case_insensitive_substrings(self):
        columns = resolve_columns(FORM_HEADER.split("\t"))
        assert columns["date"] == 0
        assert columns["time"] == 0          # "data/hora" holds both
        assert columns["guard_gate"] == 1
        assert columns["name"] == 2
        assert columns["characteristic"] == 3
        assert columns["identification"] == 4
        assert columns["access_mode"] == 5
        assert columns["category_primary"] == 6
        assert columns["vehicle_plate"] == 7
        assert columns["destination"] == 8
        assert columns["authorizer"] == 9

    def test_missing_headers_map_to_none(self):
        columns = resolve_columns(["NOME", "DESTINO"])
        assert columns["name"] == 0
        assert columns["guard_gate"] is None
        assert columns["vehicle_plate"] is None
        assert columns["category_secondary"] is None

    def test_secondary_category_needs_tipo(self):
        assert resolve_columns(["ACESSO"])["category_secondary"] is None
        assert resolve_columns(["x", "Tipo de acesso"])["category_secondary"] == 1

    def test_first_matching_header_wins(self):
        columns = resolve_columns(["NOME DO MILITAR", "NOME DO AUTORIZADOR"])
        assert columns["name"] == 0
        assert columns["authorizer"] == 1


class TestNormalizers:
    def test_gate_is_total(self):
        assert normalize_gate("G2-Sul") == GuardGate.G2
        assert normalize_gate("portão g3") == GuardGate.G3
        assert normalize_gate("Portão 2") == GuardGate.G1
        assert normalize_gate("") == GuardGate.G1
        assert normalize_gate(None) == GuardGate.G1

    def test_category_exit_from_either_column(self):
        assert normalize_category("Saída", None) == AccessCategory.EXIT
        assert normalize_category("ENTRADA", "saida") == AccessCategory.EXIT
        assert normalize_category(None, "SAÍDA") == AccessCategory.EXIT

    def test_category_defaults_to_entry(self):
        assert normalize_category(None, None) == AccessCategory.ENTRY
        assert normalize_category("Entrada", "Pedestre") == AccessCategory.ENTRY

    def test_characteristic_rules(self):
        assert normalize_characteristic("prestador") == Characteristic.PRESTADOR
        assert normalize_characteristic("ENTREGADOR") == Characteristic.ENTREGADOR
        assert normalize_characteristic("Militar da ativa") == Characteristic.MILITAR
        assert normalize_characteristic("Servidor civil") == Characteristic.CIVIL
        assert normalize_characteristic("Visitante") == Characteristic.CIVIL
        assert normalize_characteristic(None) == Characteristic.MILITAR


class TestParseTimestamp:
    def test_located_cells(self):
        ts = parse_timestamp([], "05/01/2026", "14:30", NOW)
        assert ts == datetime(2026, 1, 5, 14, 30)

    def test_combined_cell_with_seconds(self):
        cell = "05/01/2026 14:30:15"
        assert parse_timestamp([cell], cell, cell, NOW) == datetime(2026, 1, 5, 14, 30, 15)

    def test_trailing_hyphen_is_stripped(self):
        assert parse_timestamp([], "05/01/2026 - ", "09:05", NOW) == datetime(2026, 1, 5, 9, 5)

    def test_scans_row_when_located_cells_are_unusable(self):
        cells = ["G1", "--", "JOÃO", "chegou 07/02/2026 às 06:45"]
        assert parse_timestamp(cells, "--", None, NOW) == datetime(2026, 2, 7, 6, 45)

    def test_invalid_calendar_date_falls_back_to_now(self):
        assert parse_timestamp([], "31/02/2024", "10:00", NOW) == NOW

    def test_missing_time_falls_back_to_now(self):
        assert parse_timestamp(["05/01/2026"], "05/01/2026", None, NOW) == NOW


class TestParseAccessLogText:
    def test_parses_rows_with_defaults(self):
        text = "\n".join([
            FORM_HEADER,
            row("05/01/2026 07:10:00", "G2", "SGT PEREIRA", "Militar", "123456", "Veículo",
                "Entrada", "ABC1D23", "SOP", "TEN COSTA"),
            row("05/01/2026 18:02:00", "", "", "prestador", "", "", "Saída", "", "", ""),
        ])
        rows = parse_access_log_text(text, registered_by="op-7", now=NOW)

        assert len(rows) == 2
        first, second = rows
        assert first.timestamp == datetime(2026, 1, 5, 7, 10)
        assert first.guard_gate == "PORTÃO G2"
        assert first.name == "SGT PEREIRA"
        assert first.access_mode == "Veículo"
        assert first.vehicle_plate == "ABC1D23"
        assert first.registered_by == "op-7"

        assert second.guard_gate == "PORTÃO G1"
        assert second.name == "NÃO INFORMADO"
        assert second.characteristic == "PRESTADOR"
        assert second.access_category == "Saída"
        assert second.access_mode == "Pedestre"

    def test_unknown_access_mode_is_kept(self):
        text = "\n".join(["NOME\tFORMA", row("CB LIMA", "Bicicleta")])
        assert parse_access_log_text(text, "op", now=NOW)[0].access_mode == "Bicicleta"

    def test_short_and_blank_lines_are_skipped(self):
        text = "\n".join(["NOME\tDESTINO", "sozinho", "", "   ", row("CB LIMA", "SAP")])
        rows = parse_access_log_text(text, "op", now=NOW)
        assert [r.name for r in rows] == ["CB LIMA"]

    def test_header_only_yields_nothing(self):
        assert parse_access_log_text(FORM_HEADER, "op", now=NOW) == []
        assert parse_access_log_text("", "op", now=NOW) == []

    def test_invalid_date_row_uses_now(self):
        text = "\n".join(["X\tDATA\tHORA", row("a", "31/02/2024", "10:00")])
        assert parse_access_log_text(text, "op", now=NOW)[0].timestamp == NOW


class TestExport:
    def test_export_pastes_back_unchanged(self):
        text = "\n".join([
            FORM_HEADER,
            row("05/01/2026 07:10:00", "PORTÃO G3", "SGT PEREIRA", "CIVIL", "123", "Veículo",
                "Saída", "ABC1D23", "SOP", "TEN COSTA"),
        ])
        original = parse_access_log_text(text, "op", now=NOW)
        exported = export_access_logs(original)

        assert exported.splitlines()[0] == "\t".join(EXPORT_HEADER)
        again = parse_access_log_text(exported, "op", now=NOW)
        assert again[0].to_row() == original[0].to_row()
