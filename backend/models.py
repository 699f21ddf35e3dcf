"""SQLAlchemy ORM models for buildings, floors and the spaces drawn on them."""

import uuid
from sqlalchemy import Column, String, Float, Integer, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from database import Base


def generate_uuid():
    return str(uuid.uuid4())


class Building(Base):
    __tablename__ = "buildings"

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String, nullable=True)

    floors = relationship("Floor", back_populates="building", cascade="all, delete-orphan")


class Floor(Base):
    __tablename__ = "floors"

    id = Column(String, primary_key=True, default=generate_uuid)
    building_id = Column(String, ForeignKey("buildings.id"), nullable=False)
    name = Column(String, nullable=True)
    floor_number = Column(Integer, nullable=False, default=1)

    building = relationship("Building", back_populates="floors")


class Room(Base):
    __tablename__ = "rooms"

    id = Column(String, primary_key=True, default=generate_uuid)
    floor_id = Column(String, ForeignKey("floors.id"), index=True, nullable=False)
    name = Column(String, nullable=True)
    room_number = Column(String, nullable=True)
    room_type = Column(String, nullable=True)
    status = Column(String, nullable=True)
    position = Column(Text, nullable=True)  # JSON string {"x", "y"}
    size = Column(Text, nullable=True)  # JSON string {"width", "height"}
    rotation = Column(Float, nullable=True)
    parent_room_id = Column(String, ForeignKey("rooms.id"), nullable=True)
    properties = Column(Text, nullable=True)  # JSON string


class Hallway(Base):
    __tablename__ = "hallways"

    id = Column(String, primary_key=True, default=generate_uuid)
    floor_id = Column(String, ForeignKey("floors.id"), index=True, nullable=False)
    name = Column(String, nullable=True)
    status = Column(String, nullable=True)
    position = Column(Text, nullable=True)
    size = Column(Text, nullable=True)
    rotation = Column(Float, nullable=True)


class Door(Base):
    __tablename__ = "doors"

    id = Column(String, primary_key=True, default=generate_uuid)
    floor_id = Column(String, ForeignKey("floors.id"), index=True, nullable=False)
    name = Column(String, nullable=True)
    status = Column(String, nullable=True)
    position = Column(Text, nullable=True)
    size = Column(Text, nullable=True)


class SpaceConnection(Base):
    __tablename__ = "space_connections"

    id = Column(String, primary_key=True, default=generate_uuid)
    floor_id = Column(String, ForeignKey("floors.id"), index=True, nullable=False)
    from_space_id = Column(String, nullable=True)
    to_space_id = Column(String, nullable=True)
    connection_type = Column(String, nullable=True)
    direction = Column(String, nullable=True)
    hallway_position = Column(Float, nullable=True)
    offset_distance = Column(Float, nullable=True)
    status = Column(String, nullable=True)
    is_transition = Column(Boolean, nullable=True)
    is_secured = Column(Boolean, nullable=True)


class LightingFixture(Base):
    __tablename__ = "lighting_fixtures"

    id = Column(String, primary_key=True, default=generate_uuid)
    floor_id = Column(String, ForeignKey("floors.id"), index=True, nullable=False)
    space_id = Column(String, index=True, nullable=False)
    status = Column(String, nullable=False, default="functional")


# Table lookup for the write-back path
SPACE_TABLES = {
    "room": Room,
    "hallway": Hallway,
    "door": Door,
}
