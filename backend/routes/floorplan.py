"""
Floor plan scene API.

Endpoints:
  GET   /api/floors                     : List floors with building names
  GET   /api/floors/{floor_id}/scene    : Scene graph for the 2D or 3D renderer
  PATCH /api/spaces/{space_id}/position : Persist a dragged position
  PATCH /api/spaces/{space_id}/size     : Persist a resized box
  POST  /api/spaces/positions/batch     : Persist many positions at once
"""

import logging
from typing import List, Literal, Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from schemas import (
    BatchPositionUpdate,
    FloorOut,
    GeometryUpdateOut,
    PositionUpdate,
    SceneOut,
    SizeUpdate,
)
from services.layout_engine import assemble_scene
from services.spaces import (
    batch_update_positions,
    fetch_floor_connections,
    fetch_floor_spaces,
    fetch_floors,
    fetch_lighting_summary,
    get_floor,
    update_space_position,
    update_space_size,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["floorplan"])


@router.get("/floors", response_model=List[FloorOut])
async def list_floors(db: AsyncSession = Depends(get_db)):
    """All floors, highest first."""
    try:
        return await fetch_floors(db)
    except Exception as e:
        logger.error(f"Fetching floors failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/floors/{floor_id}/scene", response_model=SceneOut)
async def get_floor_scene(
    floor_id: str,
    view: Literal["2d", "3d"] = "2d",
    selected: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """
    Build the floor's scene graph.

    A floor with nothing on it (or an unknown floor) yields an empty scene,
    not an error.  Only repository failures surface as HTTP 500.
    """
    try:
        spaces = await fetch_floor_spaces(db, floor_id)
        connections = await fetch_floor_connections(db, floor_id)
        lighting = await fetch_lighting_summary(db, floor_id)
        if not spaces and await get_floor(db, floor_id) is None:
            logger.info(f"Floor {floor_id} not found, returning empty scene")
    except Exception as e:
        logger.error(f"Fetching floor {floor_id} failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))

    scene = assemble_scene(spaces, connections, lighting, target=view, selected_id=selected)
    return SceneOut(floor_id=floor_id, view=view, **scene.to_dict())


@router.patch("/spaces/{space_id}/position", response_model=GeometryUpdateOut)
async def patch_space_position(space_id: str, req: PositionUpdate, db: AsyncSession = Depends(get_db)):
    """Write a new position through; the next scene fetch picks it up."""
    position = {"x": req.position.x, "y": req.position.y}
    row = await update_space_position(db, space_id, req.type, position)
    if row is None:
        raise HTTPException(status_code=404, detail=f"No {req.type} with id {space_id}")
    return GeometryUpdateOut(id=space_id, type=req.type, position=position)


@router.patch("/spaces/{space_id}/size", response_model=GeometryUpdateOut)
async def patch_space_size(space_id: str, req: SizeUpdate, db: AsyncSession = Depends(get_db)):
    """Write a new size through; the next scene fetch picks it up."""
    size = {"width": req.size.width, "height": req.size.height}
    row = await update_space_size(db, space_id, req.type, size)
    if row is None:
        raise HTTPException(status_code=404, detail=f"No {req.type} with id {space_id}")
    return GeometryUpdateOut(id=space_id, type=req.type, size=size)


@router.post("/spaces/positions/batch")
async def post_batch_positions(req: BatchPositionUpdate, db: AsyncSession = Depends(get_db)):
    """Persist a whole batch of positions, e.g. after accepting an auto-layout."""
    updates = [
        {"id": u.id, "type": u.type, "position": {"x": u.position.x, "y": u.position.y}}
        for u in req.updates
    ]
    updated = await batch_update_positions(db, updates)
    return {"updated": updated}
