"""
Authentication endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hostel_manager.api.deps import get_current_principal, get_db
from hostel_manager.schemas.auth import AdminLoginRequest, Principal, ResidentLoginRequest, TokenResponse
from hostel_manager.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/admin/login", response_model=TokenResponse)
def admin_login(payload: AdminLoginRequest, db: Session = Depends(get_db)):
    return AuthService(db).admin_login(payload.email, payload.password).unwrap()


@router.post("/resident/login", response_model=TokenResponse)
def resident_login(payload: ResidentLoginRequest, db: Session = Depends(get_db)):
    return AuthService(db).resident_login(payload.email, payload.phone).unwrap()


@router.post("/logout")
def logout(principal: Principal = Depends(get_current_principal), db: Session = Depends(get_db)):
    AuthService(db).logout(principal).unwrap()
    return {"message": "Logged out successfully"}
