"""
Rooms and cots.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hostel_manager.api.deps import get_admin_principal, get_db
from hostel_manager.schemas.room import CotCreate, CotResponse, RoomCreate, RoomResponse
from hostel_manager.services.occupancy import OccupancyService

router = APIRouter(tags=["Rooms"], dependencies=[Depends(get_admin_principal)])


@router.get("/rooms", response_model=List[RoomResponse])
def list_rooms(db: Session = Depends(get_db)):
    return [RoomResponse.model_validate(room) for room in OccupancyService(db).list_rooms().unwrap()]


@router.post("/rooms", response_model=RoomResponse, status_code=201)
def create_room(payload: RoomCreate, db: Session = Depends(get_db)):
    return RoomResponse.model_validate(OccupancyService(db).add_room(payload.name).unwrap())


@router.delete("/rooms/{room_id}", status_code=204)
def delete_room(room_id: str, db: Session = Depends(get_db)):
    OccupancyService(db).delete_room(room_id).unwrap()


@router.get("/cots", response_model=List[CotResponse])
def list_cots(room_id: Optional[str] = None, db: Session = Depends(get_db)):
    return [CotResponse.model_validate(cot) for cot in OccupancyService(db).list_cots(room_id).unwrap()]


@router.get("/cots/available", response_model=List[CotResponse])
def list_available_cots(resident_id: Optional[str] = None, db: Session = Depends(get_db)):
    """Unoccupied cots, plus the cot ``resident_id`` already holds."""
    cots = OccupancyService(db).list_available_cots(resident_id).unwrap()
    return [CotResponse.model_validate(cot) for cot in cots]


@router.post("/cots", response_model=CotResponse, status_code=201)
def create_cot(payload: CotCreate, db: Session = Depends(get_db)):
    return CotResponse.model_validate(OccupancyService(db).add_cot(payload.name, payload.room_id).unwrap())


@router.delete("/cots/{cot_id}", status_code=204)
def delete_cot(cot_id: str, db: Session = Depends(get_db)):
    OccupancyService(db).delete_cot(cot_id).unwrap()
