"""Pydantic schemas for repository records and API request/response validation."""

from pydantic import BaseModel, Field
from typing import Annotated, Any, Literal, Optional, Union


SpaceType = Literal["room", "hallway", "door"]


# ---------- Space records (repository boundary) ----------
class _SpaceRecordBase(BaseModel):
    id: str
    name: Optional[str] = None
    status: Optional[str] = None
    floor_id: Optional[str] = None
    position: Any = None   # raw: None, JSON text or {"x", "y"} mapping
    size: Any = None       # raw: None, JSON text or {"width", "height"} mapping
    rotation: Optional[float] = None
    properties: dict = {}


class RoomRecord(_SpaceRecordBase):
    type: Literal["room"] = "room"
    room_number: Optional[str] = None
    room_type: Optional[str] = None
    parent_room_id: Optional[str] = None


class HallwayRecord(_SpaceRecordBase):
    type: Literal["hallway"] = "hallway"


class DoorRecord(_SpaceRecordBase):
    type: Literal["door"] = "door"


SpaceRecord = Annotated[
    Union[RoomRecord, HallwayRecord, DoorRecord],
    Field(discriminator="type"),
]


class ConnectionRecord(BaseModel):
    id: Optional[str] = None
    from_id: Optional[str] = Field(default=None, alias="from")
    to_id: Optional[str] = Field(default=None, alias="to")
    connection_type: Optional[str] = None
    direction: Optional[str] = None
    hallway_position: Optional[float] = None
    offset_distance: Optional[float] = None
    status: Optional[str] = None
    is_transition: Optional[bool] = None
    is_secured: Optional[bool] = None

    class Config:
        populate_by_name = True


# ---------- Geometry ----------
class PositionIn(BaseModel):
    x: float = Field(..., allow_inf_nan=False)
    y: float = Field(..., allow_inf_nan=False)


class SizeIn(BaseModel):
    width: float = Field(..., allow_inf_nan=False)
    height: float = Field(..., allow_inf_nan=False)


# ---------- Floors ----------
class FloorOut(BaseModel):
    id: str
    name: str
    floor_number: int
    building_id: str
    building_name: str


# ---------- Scene graph ----------
class NodeOut(BaseModel):
    id: str
    type: SpaceType
    label: str
    position: PositionIn
    size: SizeIn
    rotation: float = 0
    z_order: int = 0
    style: dict = {}
    properties: dict = {}
    has_stored_position: bool = True
    is_error: bool = False


class EdgeOut(BaseModel):
    id: str
    source: str
    target: str
    connection_type: str
    direction: Optional[str] = None
    is_transition: bool = False
    is_secured: bool = False
    hallway_position: float = 0.5
    offset_distance: Optional[float] = None
    shape: str = "straight"
    style: dict = {}
    is_active: bool = True


class SceneOut(BaseModel):
    floor_id: str
    view: Literal["2d", "3d"] = "2d"
    nodes: list[NodeOut] = []
    edges: list[EdgeOut] = []
    selected_id: Optional[str] = None


# ---------- Write-back ----------
class PositionUpdate(BaseModel):
    type: SpaceType
    position: PositionIn


class SizeUpdate(BaseModel):
    type: SpaceType
    size: SizeIn


class BatchPositionItem(BaseModel):
    id: str
    type: SpaceType
    position: PositionIn


class BatchPositionUpdate(BaseModel):
    updates: list[BatchPositionItem] = Field(..., description="Position updates to persist")


class GeometryUpdateOut(BaseModel):
    id: str
    type: SpaceType
    position: Optional[PositionIn] = None
    size: Optional[SizeIn] = None
