"""CSV loader — reads and normalizes roster, query and relationship files."""

from __future__ import annotations

import csv
import logging
from datetime import date, datetime
from pathlib import Path

from assignment_desk.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    parse_bool,
    parse_list,
)

logger = logging.getLogger(__name__)

DATE_FORMATS = ("%Y-%m-%d", "%d.%m.%Y", "%d/%m/%Y", "%m/%d/%Y")


def _sniff_dialect(sample: str) -> type[csv.Dialect] | csv.Dialect:
    """Detect the delimiter (comma/semicolon/tab) to support spreadsheet exports."""
    if not sample:
        return csv.get_dialect("excel")

    first_line = sample.splitlines()[0]
    delims = [";", ",", "\t"]
    counts = {d: first_line.count(d) for d in delims}
    best_delim = max(counts, key=counts.get)

    if counts[best_delim] > 0:
        class DynamicDialect(csv.excel):
            delimiter = best_delim
        return DynamicDialect

    try:
        return csv.Sniffer().sniff(sample, delimiters=[",", ";", "\t"])
    except csv.Error:
        return csv.get_dialect("excel")


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str]]:
    """Read a CSV file with BOM handling and column normalization.

    Args:
        file_path: path to the CSV file.
        encoding: file encoding (utf-8-sig strips BOM automatically).

    Returns:
        List of dicts with normalized column names.
    """
    with open(file_path, encoding=encoding, newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        reader = csv.DictReader(f, dialect=_sniff_dialect(sample))
        if reader.fieldnames is None:
            raise ValueError(f"CSV file {file_path} has no header row")

        col_map = {col: normalize_column_name(col) for col in reader.fieldnames}
        rows = []
        for raw_row in reader:
            row = {col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None}
            rows.append(row)

    logger.info("Loaded %d rows from %s (columns: %s)", len(rows), file_path.name, list(col_map.values()))
    return rows


def _first(row: dict, *keys: str) -> str | None:
    for key in keys:
        value = clean_string(row.get(key))
        if value is not None:
            return value
    return None


def _parse_int(value: str | None, default: int = 0) -> int:
    if not value:
        return default
    try:
        # handle "4", "4.0"
        return int(float(str(value).replace(",", ".").strip()))
    except ValueError:
        return default


def _parse_optional_int(value: str | None) -> int | None:
    if not value:
        return None
    return _parse_int(value) or None


def parse_date(raw: str | None) -> date | None:
    """Parse dates in the formats spreadsheet exports typically use."""
    if not raw:
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(raw.strip(), fmt).date()
        except ValueError:
            continue
    logger.warning("Could not parse date: %s", raw)
    return None


def load_staff(file_path: Path) -> list[dict]:
    """Load and normalize the staff roster CSV.

    Expected columns (after normalization):
        name, role, status/active, expertise (or operational_countries),
        capacity (or workload_capacity), assigned, auto_assign, sequence
    """
    rows = _read_csv(file_path)
    staff = []
    for row in rows:
        status = _first(row, "status", "active")
        staff.append({
            "name": _first(row, "name", "staff_name", "full_name") or "",
            "role": _first(row, "role", "position", "department") or "Travel Consultant",
            "active": parse_bool(status, default=True),
            "expertise": parse_list(_first(row, "expertise", "operational_countries", "countries")),
            "workload_capacity": _parse_int(_first(row, "capacity", "workload_capacity"), default=10),
            "assigned": _parse_int(_first(row, "assigned", "current_load")),
            "auto_assign_enabled": parse_bool(_first(row, "auto_assign", "auto_assign_enabled"), default=True),
            "sequence_order": _parse_optional_int(_first(row, "sequence", "sequence_order")),
        })
    logger.info("Parsed %d staff members", len(staff))
    return staff


def load_queries(file_path: Path) -> list[dict]:
    """Load and normalize the queries (enquiries) CSV.

    Expected columns (after normalization):
        id, country, cities, adults, children, infants, travel_from, travel_to,
        nights, agent_id, agent_name, status
    """
    rows = _read_csv(file_path)
    queries = []
    for row in rows:
        queries.append({
            "id": _first(row, "id", "query_id", "enquiry_id") or "",
            "country": _first(row, "country", "destination", "destination_country") or "",
            "cities": parse_list(_first(row, "cities", "city", "destination_cities")),
            "adults": _parse_int(_first(row, "adults"), default=1),
            "children": _parse_int(_first(row, "children")),
            "infants": _parse_int(_first(row, "infants")),
            "travel_from": parse_date(_first(row, "travel_from", "from_date", "start_date")),
            "travel_to": parse_date(_first(row, "travel_to", "to_date", "end_date")),
            "trip_duration": _parse_optional_int(_first(row, "nights", "trip_duration", "duration")),
            "agent_id": _first(row, "agent_id"),
            "agent_name": _first(row, "agent_name", "agent"),
            "status": (_first(row, "status") or "new").lower(),
        })
    logger.info("Parsed %d queries", len(queries))
    return queries


def load_relationships(file_path: Path) -> list[dict]:
    """Load agent ↔ staff relationships.

    Expected columns (after normalization): agent_id, staff (name), primary
    """
    rows = _read_csv(file_path)
    links = []
    for row in rows:
        agent_id = _first(row, "agent_id", "agent")
        staff_name = _first(row, "staff", "staff_name", "name")
        if not agent_id or not staff_name:
            logger.warning("Skipping incomplete relationship row: %s", row)
            continue
        links.append({
            "agent_id": agent_id,
            "staff_name": staff_name,
            "is_primary": parse_bool(_first(row, "primary", "is_primary"), default=False),
        })
    logger.info("Parsed %d agent-staff relationships", len(links))
    return links
