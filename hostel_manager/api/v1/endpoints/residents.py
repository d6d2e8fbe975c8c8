"""
Resident administration: create/update with cot assignment, lifecycle
transitions, meal plans, room history and documents.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from hostel_manager.api.deps import get_admin_principal, get_db, get_logo_service
from hostel_manager.models.base import ResidentStatus
from hostel_manager.schemas.resident import (
    MealPlan,
    ResidentResponse,
    ResidentStatusChange,
    ResidentWrite,
    RoomHistoryResponse,
)
from hostel_manager.services.documents import DocumentService
from hostel_manager.services.file import LogoService
from hostel_manager.services.occupancy import OccupancyService

router = APIRouter(
    prefix="/residents",
    tags=["Residents"],
    dependencies=[Depends(get_admin_principal)],
)


@router.get("", response_model=List[ResidentResponse])
def list_residents(status: Optional[ResidentStatus] = None, db: Session = Depends(get_db)):
    residents = OccupancyService(db).list_residents(status).unwrap()
    return [ResidentResponse.model_validate(r) for r in residents]


@router.post("", response_model=ResidentResponse, status_code=201)
def create_resident(payload: ResidentWrite, db: Session = Depends(get_db)):
    resident = OccupancyService(db).assign_or_update_resident(payload).unwrap()
    return ResidentResponse.model_validate(resident)


@router.get("/{resident_id}", response_model=ResidentResponse)
def get_resident(resident_id: str, db: Session = Depends(get_db)):
    return ResidentResponse.model_validate(OccupancyService(db).get_resident(resident_id).unwrap())


@router.put("/{resident_id}", response_model=ResidentResponse)
def update_resident(resident_id: str, payload: ResidentWrite, db: Session = Depends(get_db)):
    resident = OccupancyService(db).assign_or_update_resident(payload, resident_id=resident_id).unwrap()
    return ResidentResponse.model_validate(resident)


@router.patch("/{resident_id}/status", response_model=ResidentResponse)
def change_status(resident_id: str, payload: ResidentStatusChange, db: Session = Depends(get_db)):
    resident = OccupancyService(db).change_resident_status(
        resident_id, payload.status, payload.effective_date
    ).unwrap()
    return ResidentResponse.model_validate(resident)


@router.post("/{resident_id}/vacate", response_model=ResidentResponse)
def vacate_resident(resident_id: str, db: Session = Depends(get_db)):
    resident = OccupancyService(db).change_resident_status(resident_id, ResidentStatus.VACATED).unwrap()
    return ResidentResponse.model_validate(resident)


@router.post("/{resident_id}/delete", response_model=ResidentResponse)
def soft_delete_resident(resident_id: str, db: Session = Depends(get_db)):
    resident = OccupancyService(db).change_resident_status(resident_id, ResidentStatus.DELETED).unwrap()
    return ResidentResponse.model_validate(resident)


@router.post("/{resident_id}/restore", response_model=ResidentResponse)
def restore_resident(resident_id: str, db: Session = Depends(get_db)):
    resident = OccupancyService(db).restore_resident(resident_id).unwrap()
    return ResidentResponse.model_validate(resident)


@router.put("/{resident_id}/meal-plan", response_model=ResidentResponse)
def update_meal_plan(resident_id: str, payload: MealPlan, db: Session = Depends(get_db)):
    resident = OccupancyService(db).update_meal_plan(resident_id, payload).unwrap()
    return ResidentResponse.model_validate(resident)


@router.get("/{resident_id}/room-history", response_model=List[RoomHistoryResponse])
def room_history(resident_id: str, db: Session = Depends(get_db)):
    entries = OccupancyService(db).room_history(resident_id).unwrap()
    return [RoomHistoryResponse.model_validate(e) for e in entries]


@router.get("/{resident_id}/documents/{kind}")
def resident_document(
    resident_id: str,
    kind: str,
    db: Session = Depends(get_db),
    logos: LogoService = Depends(get_logo_service),
):
    document = DocumentService(db, logos=logos).resident_document(resident_id, kind).unwrap()
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )
