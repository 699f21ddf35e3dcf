"""
Space repository: floors, spaces, connections and lighting summaries.

Rows are validated into tagged ``SpaceRecord`` types here, once; the
layout engine trusts their shape.  Stored geometry is passed through raw
(JSON text) for the engine to normalize.
"""

import json
import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Building, Door, Floor, Hallway, LightingFixture, Room, SpaceConnection, SPACE_TABLES
from schemas import ConnectionRecord, DoorRecord, HallwayRecord, RoomRecord

logger = logging.getLogger(__name__)


def _load_properties(raw: Optional[str]) -> dict:
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except ValueError:
        logger.debug("Ignoring unparseable properties: %r", raw)
        return {}
    return value if isinstance(value, dict) else {}


async def fetch_floors(db: AsyncSession) -> List[dict]:
    """All floors with their building name, highest floor first."""
    result = await db.execute(
        select(Floor, Building.name)
        .join(Building, Floor.building_id == Building.id, isouter=True)
        .order_by(Floor.floor_number.desc())
    )
    return [
        {
            "id": floor.id,
            "name": floor.name or f"Floor {floor.floor_number}",
            "floor_number": floor.floor_number,
            "building_id": floor.building_id,
            "building_name": building_name or "Unknown Building",
        }
        for floor, building_name in result.all()
    ]


async def get_floor(db: AsyncSession, floor_id: str) -> Optional[Floor]:
    return await db.get(Floor, floor_id)


async def fetch_floor_spaces(db: AsyncSession, floor_id: str) -> list:
    """Rooms, then hallways, then doors of a floor as tagged records."""
    spaces = []

    rooms = await db.execute(select(Room).where(Room.floor_id == floor_id).order_by(Room.id))
    for row in rooms.scalars():
        spaces.append(RoomRecord(
            id=row.id,
            name=row.name,
            status=row.status,
            floor_id=row.floor_id,
            position=row.position,
            size=row.size,
            rotation=row.rotation,
            room_number=row.room_number,
            room_type=row.room_type,
            parent_room_id=row.parent_room_id,
            properties=_load_properties(row.properties),
        ))

    hallways = await db.execute(select(Hallway).where(Hallway.floor_id == floor_id).order_by(Hallway.id))
    for row in hallways.scalars():
        spaces.append(HallwayRecord(
            id=row.id,
            name=row.name,
            status=row.status,
            floor_id=row.floor_id,
            position=row.position,
            size=row.size,
            rotation=row.rotation,
        ))

    doors = await db.execute(select(Door).where(Door.floor_id == floor_id).order_by(Door.id))
    for row in doors.scalars():
        spaces.append(DoorRecord(
            id=row.id,
            name=row.name,
            status=row.status,
            floor_id=row.floor_id,
            position=row.position,
            size=row.size,
        ))

    logger.info("Fetched %d spaces for floor %s", len(spaces), floor_id)
    return spaces


async def fetch_floor_connections(db: AsyncSession, floor_id: str) -> List[ConnectionRecord]:
    result = await db.execute(
        select(SpaceConnection)
        .where(SpaceConnection.floor_id == floor_id)
        .order_by(SpaceConnection.id)
    )
    return [
        ConnectionRecord(
            id=row.id,
            from_id=row.from_space_id,
            to_id=row.to_space_id,
            connection_type=row.connection_type,
            direction=row.direction,
            hallway_position=row.hallway_position,
            offset_distance=row.offset_distance,
            status=row.status,
            is_transition=row.is_transition,
            is_secured=row.is_secured,
        )
        for row in result.scalars()
    ]


async def fetch_lighting_summary(db: AsyncSession, floor_id: str) -> Dict[str, dict]:
    """``{space_id: {"total_fixtures": n, "functional_fixtures": m}}``."""
    result = await db.execute(
        select(
            LightingFixture.space_id,
            func.count(LightingFixture.id),
            func.sum(case((LightingFixture.status == "functional", 1), else_=0)),
        )
        .where(LightingFixture.floor_id == floor_id)
        .group_by(LightingFixture.space_id)
    )
    return {
        space_id: {"total_fixtures": total, "functional_fixtures": int(functional or 0)}
        for space_id, total, functional in result.all()
    }


async def update_space_position(db: AsyncSession, space_id: str, space_type: str, position: dict):
    """Persist a new position. Returns the row, or None if there is no such space."""
    row = await db.get(SPACE_TABLES[space_type], space_id)
    if row is None:
        return None
    row.position = json.dumps(position)
    await db.commit()
    await db.refresh(row)
    return row


async def update_space_size(db: AsyncSession, space_id: str, space_type: str, size: dict):
    """Persist a new size. Returns the row, or None if there is no such space."""
    row = await db.get(SPACE_TABLES[space_type], space_id)
    if row is None:
        return None
    row.size = json.dumps(size)
    await db.commit()
    await db.refresh(row)
    return row


async def batch_update_positions(db: AsyncSession, updates: Iterable[dict]) -> int:
    """
    Persist many positions in one commit (e.g. saving an auto-layout).

    Each update is ``{"id", "type", "position"}``.  Unknown ids are logged
    and skipped.  Returns the number of rows updated.
    """
    updated = 0
    for item in updates:
        row = await db.get(SPACE_TABLES[item["type"]], item["id"])
        if row is None:
            logger.warning("Batch update: no %s with id %s", item["type"], item["id"])
            continue
        row.position = json.dumps(item["position"])
        updated += 1
    await db.commit()
    return updated
