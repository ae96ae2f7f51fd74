# guardiao/services/access_import_parser.py
"""
Parses gate access logs pasted from a spreadsheet (tab-separated, header row
first) into AccessLogCandidate rows ready for insertion.

Header cells are matched by keyword fragments, not exact names, because every
gate keeps its own sheet layout ("Nº GUARDA/PORTÃO", "Caracteristica",
"Carimbo de data/hora", ...). Per-field fallbacks keep a badly filled row
importable instead of rejecting it.
"""

import re
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Optional

from guardiao.constants import AccessCategory, Characteristic, GuardGate
from guardiao.utils.logger import get_logger

logger = get_logger(__name__)

# field -> groups of fragments; a header matches when every group has at least
# one fragment contained in it. First matching header cell wins.
COLUMN_KEYWORDS: dict[str, list[tuple[str, ...]]] = {
    "guard_gate":         [("GUARDA", "PORTÃO")],
    "name":               [("NOME",)],
    "characteristic":     [("CARACTERISTICA", "CARACTERÍSTICA")],
    "identification":     [("IDENTIDADE", "IDENTIFICAÇÃO", "DOCUMENTO")],
    "access_mode":        [("FORMA", "MODO", "INGRESSO")],
    "category_primary":   [("CATEGORIA",)],
    "category_secondary": [("TIPO",), ("ACESSO", "TIPO")],
    "vehicle_model":      [("MODELO", "VEÍCULO", "VEICULO")],
    "vehicle_plate":      [("PLACA",)],
    "destination":        [("DESTINO",)],
    "authorizer":         [("AUTORIZA",)],
    "date":               [("CARIMBO", "DATA")],
    "time":               [("HORA",)],
}

DEFAULT_GATE = "PORTÃO G1"
DEFAULT_CHARACTERISTIC = "MILITAR"
DEFAULT_NAME = "NÃO INFORMADO"
DEFAULT_ACCESS_MODE = "Pedestre"

_DATE_SCAN = re.compile(r"\d{2}/\d{2}/\d{4}")
_TIME_SCAN = re.compile(r"\d{2}:\d{2}")
_DATE_PARTS = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})")
_TIME_PARTS = re.compile(r"(\d{1,2}):(\d{2})(?::(\d{2}))?")
_TRAILING_HYPHENS = re.compile(r"[\s-]+$")


@dataclass
class AccessLogCandidate:
    timestamp: datetime
    guard_gate: str
    name: str
    characteristic: str
    identification: str
    access_mode: str
    access_category: str
    vehicle_model: str
    vehicle_plate: str
    destination: str
    authorizer: str
    registered_by: str

    def to_row(self) -> dict:
        return asdict(self)


def _header_matches(header: str, groups: list[tuple[str, ...]]) -> bool:
    return all(any(fragment in header for fragment in group) for group in groups)


def resolve_columns(header_cells: list[str]) -> dict[str, Optional[int]]:
    """
    Map every logical field to the index of the first header cell containing
    one of its keywords. Fields with no matching header map to None; several
    fields may share a column.
    """
    headers = [h.strip().upper() for h in header_cells]
    columns: dict[str, Optional[int]] = {}
    for field_name, groups in COLUMN_KEYWORDS.items():
        columns[field_name] = next(
            (i for i, h in enumerate(headers) if _header_matches(h, groups)),
            None,
        )
    return columns


def normalize_gate(value: Optional[str]) -> GuardGate:
    """Total function: any text maps to exactly one gate, G1 when no G1/G2/G3 marker is present."""
    text = (value if value is not None else DEFAULT_GATE).upper()
    if "G1" in text:
        return GuardGate.G1
    if "G2" in text:
        return GuardGate.G2
    if "G3" in text:
        return GuardGate.G3
    return GuardGate.G1


def normalize_category(primary: Optional[str], secondary: Optional[str]) -> AccessCategory:
    for value in (primary, secondary):
        text = (value or "").upper()
        if "SAÍDA" in text or "SAIDA" in text:
            return AccessCategory.EXIT
    return AccessCategory.ENTRY


def normalize_characteristic(value: Optional[str]) -> Characteristic:
    text = (value if value is not None else DEFAULT_CHARACTERISTIC).upper()
    for known in Characteristic:
        if text == known.value:
            return known
    if "MILITAR" in text:
        return Characteristic.MILITAR
    if "CIVIL" in text:
        return Characteristic.CIVIL
    return Characteristic.CIVIL


def _scan(cells: list[str], pattern: re.Pattern) -> Optional[str]:
    for cell in cells:
        match = pattern.search(cell)
        if match:
            return match.group(0)
    return None


def parse_timestamp(cells: list[str], date_cell: Optional[str], time_cell: Optional[str],
                    now: datetime) -> datetime:
    """
    Build the access instant from the located date/time cells, falling back to
    any DD/MM/YYYY and HH:MM found elsewhere in the row. Returns `now` when
    either part is missing or the date is not a real calendar date.
    """
    date_str = _TRAILING_HYPHENS.sub("", date_cell or "").strip()
    if "/" not in date_str:
        date_str = _scan(cells, _DATE_SCAN) or ""

    time_str = time_cell or ""
    if ":" not in time_str:
        time_str = _scan(cells, _TIME_SCAN) or ""

    date_match = _DATE_PARTS.search(date_str)
    time_match = _TIME_PARTS.search(time_str)
    if not date_match or not time_match:
        logger.debug(f"[IMPORT] No usable date/time in row (date={date_str!r} time={time_str!r}), using now")
        return now

    day, month, year = (int(p) for p in date_match.groups())
    hour, minute = int(time_match.group(1)), int(time_match.group(2))
    second = int(time_match.group(3) or 0)
    try:
        return datetime(year, month, day, hour, minute, second)
    except ValueError as e:
        logger.warning(f"[IMPORT] Invalid date/time {date_str} {time_str}: {e}, using now")
        return now


def _cell(cells: list[str], index: Optional[int]) -> Optional[str]:
    if index is None or index >= len(cells):
        return None
    return cells[index]


def normalize_row(cells: list[str], columns: dict[str, Optional[int]],
                  registered_by: str, now: datetime) -> AccessLogCandidate:
    def get(field_name: str) -> Optional[str]:
        return _cell(cells, columns.get(field_name))

    return AccessLogCandidate(
        timestamp=parse_timestamp(cells, get("date"), get("time"), now),
        guard_gate=normalize_gate(get("guard_gate")).value,
        name=get("name") or DEFAULT_NAME,
        characteristic=normalize_characteristic(get("characteristic")).value,
        identification=get("identification") or "",
        access_mode=get("access_mode") or DEFAULT_ACCESS_MODE,
        access_category=normalize_category(get("category_primary"), get("category_secondary")).value,
        vehicle_model=get("vehicle_model") or "",
        vehicle_plate=get("vehicle_plate") or "",
        destination=get("destination") or "",
        authorizer=get("authorizer") or "",
        registered_by=registered_by,
    )


def parse_access_log_text(text: str, registered_by: str,
                          now: Optional[datetime] = None) -> list[AccessLogCandidate]:
    """
    Parse pasted spreadsheet text. The first non-empty line is the header;
    data rows with fewer than two cells are skipped.
    """
    now = now or datetime.now()
    lines = [line for line in (text or "").strip().splitlines() if line.strip()]
    if not lines:
        return []

    columns = resolve_columns(lines[0].split("\t"))
    logger.debug(f"[IMPORT] Resolved columns: {columns}")

    candidates = []
    for line in lines[1:]:
        cells = [c.strip() for c in line.split("\t")]
        if len(cells) < 2:
            continue
        candidates.append(normalize_row(cells, columns, registered_by, now))

    logger.info(f"[IMPORT] Parsed {len(candidates)} rows from {len(lines) - 1} data lines")
    return candidates


EXPORT_HEADER = [
    "DATA", "HORA", "GUARDA/PORTÃO", "NOME", "CARACTERÍSTICA", "IDENTIDADE",
    "FORMA DE INGRESSO", "CATEGORIA", "MODELO", "PLACA", "DESTINO", "AUTORIZADOR",
]


def export_access_logs(entries) -> str:
    """
    Render access log rows (models or candidates) as tab-separated text whose
    header resolve_columns() recognises, so the export can be pasted back in.
    """
    lines = ["\t".join(EXPORT_HEADER)]
    for e in entries:
        cells = [
            e.timestamp.strftime("%d/%m/%Y"),
            e.timestamp.strftime("%H:%M:%S"),
            e.guard_gate, e.name, e.characteristic, e.identification or "",
            e.access_mode, e.access_category, e.vehicle_model or "",
            e.vehicle_plate or "", e.destination or "", e.authorizer or "",
        ]
        lines.append("\t".join(c.replace("\t", " ") for c in cells))
    return "\n".join(lines)
