"""Seed database from CSV files.

Usage:
    python -m assignment_desk.tools.seed_db
    python -m assignment_desk.tools.seed_db --data-dir data
    python -m assignment_desk.tools.seed_db --drop  # drop existing data first
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from assignment_desk.adapters.csv_loader.loader import (
    load_queries,
    load_relationships,
    load_staff,
)
from assignment_desk.adapters.persistence.database import async_session_factory
from assignment_desk.adapters.persistence.models import (
    AgentStaffRelationModel,
    AssignmentModel,
    AssignmentRuleModel,
    QueryModel,
    StaffModel,
)
from assignment_desk.domain.policies.rule_catalog import default_rules
from assignment_desk.domain.value_objects.enums import QueryStatus

logger = logging.getLogger(__name__)


async def _drop_data(session: AsyncSession) -> None:
    """Delete all data in correct order (respecting FK constraints)."""
    for model in [
        AssignmentModel,
        AgentStaffRelationModel,
        QueryModel,
        AssignmentRuleModel,
        StaffModel,
    ]:
        await session.execute(delete(model))
    await session.commit()
    logger.info("Dropped all existing data")


async def _seed_rules(session: AsyncSession) -> int:
    existing = (await session.execute(select(func.count(AssignmentRuleModel.id)))).scalar() or 0
    if existing:
        logger.debug("Assignment rules already configured, skipping")
        return 0
    for rule in default_rules():
        session.add(AssignmentRuleModel(
            name=rule.name,
            rule_type=rule.rule_type.value,
            priority=rule.priority,
            enabled=rule.enabled,
        ))
    await session.commit()
    logger.info("Initialized default assignment rules")
    return len(default_rules())


async def seed(data_dir: Path, drop: bool = False) -> dict[str, int]:
    """Main seed function. Returns counts of seeded records."""
    counts = {"staff": 0, "relationships": 0, "queries": 0, "rules": 0}

    staff_csv = _find_csv(
        data_dir, ["staff", "roster", "team", "employees"], exclude=("agent", "relation"),
    )
    query_csv = _find_csv(data_dir, ["queries", "enquiries", "inquiries", "leads"])
    relation_csv = _find_csv(data_dir, ["agent_staff", "relationships", "relations"])

    if not staff_csv:
        raise FileNotFoundError(
            f"No staff CSV found in {data_dir}. Expected something like staff.csv"
        )

    async with async_session_factory() as session:
        if drop:
            await _drop_data(session)

        counts["rules"] = await _seed_rules(session)

        # 1. Seed staff
        for sd in load_staff(staff_csv):
            problem = _staff_row_problem(sd)
            if problem:
                logger.warning("Skipping staff row %s: %s", sd["name"] or "?", problem)
                continue
            existing = await session.execute(
                select(StaffModel).where(StaffModel.name == sd["name"])
            )
            if existing.scalar_one_or_none():
                logger.debug("Staff '%s' already exists, skipping", sd["name"])
                continue

            session.add(StaffModel(
                name=sd["name"],
                role=sd["role"],
                active=sd["active"],
                expertise=sd["expertise"],
                workload_capacity=sd["workload_capacity"],
                # open load carried over from the CSV
                assigned=sd["assigned"],
                auto_assign_enabled=sd["auto_assign_enabled"],
                sequence_order=sd["sequence_order"],
            ))
            counts["staff"] += 1
        await session.commit()

        result = await session.execute(select(StaffModel))
        staff_name_to_id = {s.name: s.id for s in result.scalars()}

        # 2. Seed agent relationships (if CSV exists)
        if relation_csv:
            for rd in load_relationships(relation_csv):
                staff_id = _resolve_staff_id(rd["staff_name"], staff_name_to_id)
                if staff_id is None:
                    logger.warning(
                        "Relationship for agent '%s': staff '%s' not found, skipping",
                        rd["agent_id"], rd["staff_name"],
                    )
                    continue
                existing = await session.execute(
                    select(AgentStaffRelationModel).where(
                        AgentStaffRelationModel.agent_id == rd["agent_id"],
                        AgentStaffRelationModel.staff_id == staff_id,
                    )
                )
                if existing.scalar_one_or_none():
                    continue
                session.add(AgentStaffRelationModel(
                    agent_id=rd["agent_id"],
                    staff_id=staff_id,
                    is_primary=rd["is_primary"],
                ))
                counts["relationships"] += 1
            await session.commit()
        else:
            logger.info("No relationships CSV found — skipping agent links")

        # 3. Seed queries (if CSV exists)
        if query_csv:
            for qd in load_queries(query_csv):
                problem = _query_row_problem(qd)
                if problem:
                    logger.warning("Skipping query row %s: %s", qd["id"] or "?", problem)
                    continue
                if await session.get(QueryModel, qd["id"]):
                    logger.debug("Query '%s' already exists, skipping", qd["id"])
                    continue
                status = qd["status"]
                if status not in {s.value for s in QueryStatus}:
                    logger.warning("Query '%s': unknown status '%s', importing as new", qd["id"], status)
                    status = QueryStatus.NEW.value

                session.add(QueryModel(
                    id=qd["id"],
                    country=qd["country"],
                    cities=qd["cities"],
                    adults=qd["adults"],
                    children=qd["children"],
                    infants=qd["infants"],
                    travel_from=qd["travel_from"],
                    travel_to=qd["travel_to"],
                    trip_duration=qd["trip_duration"],
                    agent_id=qd["agent_id"],
                    agent_name=qd["agent_name"],
                    status=status,
                ))
                # flush per row so created_at reflects file order
                await session.flush()
                counts["queries"] += 1
            await session.commit()
        else:
            logger.info("No queries CSV found — skipping query import")

    logger.info(
        "Seed complete: %d staff, %d relationships, %d queries, %d rules",
        counts["staff"], counts["relationships"], counts["queries"], counts["rules"],
    )
    return counts


def _staff_row_problem(sd: dict) -> str | None:
    """Why a parsed staff row cannot be stored, or None if it can."""
    if not sd["name"]:
        return "missing name"
    if sd["workload_capacity"] <= 0:
        return f"capacity must be positive, got {sd['workload_capacity']}"
    if sd["assigned"] < 0:
        return f"assigned must not be negative, got {sd['assigned']}"
    return None


def _query_row_problem(qd: dict) -> str | None:
    """Why a parsed query row cannot be stored, or None if it can."""
    if not qd["id"]:
        return "missing id"
    start, end = qd["travel_from"], qd["travel_to"]
    if start is not None and end is not None and end < start:
        return f"travel end {end} precedes start {start}"
    return None


def _find_csv(
    data_dir: Path, name_hints: list[str], exclude: tuple[str, ...] = ()
) -> Path | None:
    """Find a CSV file matching any of the name hints, exact file names first."""
    files = [
        f for f in sorted(data_dir.glob("*.csv"))
        if not any(x in f.stem.lower() for x in exclude)
    ]
    for hint in name_hints:
        for f in files:
            if f.stem.lower() == hint:
                logger.info("Found CSV: %s", f.name)
                return f
    for f in files:
        fname_lower = f.stem.lower()
        for hint in name_hints:
            if hint in fname_lower:
                logger.info("Found CSV: %s (matched hint '%s')", f.name, hint)
                return f
    return None


def _resolve_staff_id(staff_name: str, staff_map: dict[str, int]) -> int | None:
    """Resolve a staff name to an id: exact match first, then case-insensitive."""
    if not staff_name:
        return None
    if staff_name in staff_map:
        return staff_map[staff_name]

    name_lower = staff_name.strip().lower()
    for known_name, sid in staff_map.items():
        if known_name.lower() == name_lower:
            return sid
    return None


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
    parser = argparse.ArgumentParser(description="Seed the assignment desk database from CSV files")
    parser.add_argument(
        "--data-dir", type=str, default="data",
        help="Directory containing CSV files (default: data)",
    )
    parser.add_argument(
        "--drop", action="store_true",
        help="Drop existing data before seeding",
    )
    args = parser.parse_args()

    data_dir = Path(args.data_dir)
    if not data_dir.exists():
        logger.error("Data directory not found: %s", data_dir)
        sys.exit(1)

    asyncio.run(seed(data_dir, drop=args.drop))


if __name__ == "__main__":
    main()
