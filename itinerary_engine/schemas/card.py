"""
schemas/card.py
---------------
Input/output boundary between the trip board's card rows and the engine.

A board card stores its place data in ``payload_json`` (a dict, or a JSON
string when read straight from the database).  The payload is decoded once
here into a typed ``Stop``; the engine itself never parses payloads.

Usage:
    cards = [CardRecord.model_validate(row) for row in rows]
    stops = [card.to_stop() for card in cards]
    ...
    for stop in plan.stops:
        repo.update(stop.id, order=stop.sequence_index, travel_info=travel_info_for(stop))
"""

from __future__ import annotations

import json
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from itinerary_engine.schemas.itinerary import Coordinate, Stop


CardType = Literal["hotel", "spot", "food", "activity", "note", "product"]


class CoordinatesPayload(BaseModel):
    """``{"lat": .., "lng": ..}`` as stored on the card payload."""
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)

    def to_coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.lat, longitude=self.lng)


class CardPayload(BaseModel):
    """The subset of a card payload the engine cares about; extra keys are kept."""
    model_config = ConfigDict(extra="allow")

    name: str = ""
    coordinates: Optional[CoordinatesPayload] = None


class TravelInfoPayload(BaseModel):
    distance: float = Field(..., ge=0.0)
    duration: int = Field(..., ge=0)
    mode: str
    next_stop_id: str = ""


class CardRecord(BaseModel):
    """One card row from the board's persistence layer."""
    model_config = ConfigDict(extra="ignore")

    id: str
    trip_id: str = ""
    type: CardType = "spot"
    payload_json: CardPayload = Field(default_factory=CardPayload)
    day: Optional[int] = Field(None, ge=0)
    time_slot: Optional[str] = None
    order: Optional[int] = None
    travel_info: Optional[TravelInfoPayload] = None

    @field_validator("payload_json", mode="before")
    @classmethod
    def _decode_payload(cls, value: Union[str, dict, None]) -> Any:
        if value is None:
            return {}
        if isinstance(value, (str, bytes)):
            return json.loads(value) if value else {}
        return value

    @field_validator("time_slot", mode="before")
    @classmethod
    def _blank_time_slot(cls, value: Optional[str]) -> Optional[str]:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_stop(self) -> Stop:
        """Decode into an engine Stop. A stored travel_info is never trusted."""
        coords = self.payload_json.coordinates
        return Stop(
            id=self.id,
            day=self.day or 0,
            sequence_index=self.order or 0,
            coordinates=coords.to_coordinate() if coords else None,
            time_slot=self.time_slot,
            outgoing_leg=None,
            name=self.payload_json.name,
            kind=self.type,
        )


def travel_info_for(stop: Stop) -> Optional[dict]:
    """Render a stop's outgoing leg in the card's ``travel_info`` shape."""
    leg = stop.outgoing_leg
    if leg is None:
        return None
    return TravelInfoPayload(
        distance=leg.distance_km,
        duration=leg.duration_minutes,
        mode=leg.mode.value,
        next_stop_id="" if leg.target_stop_id is None else str(leg.target_stop_id),
    ).model_dump()
