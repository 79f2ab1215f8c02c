# ration_store/modules/families/router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from ration_store.config.database import get_db
from ration_store.shared.schemas.common import ErrorResponse, MessageResponse
from .service import FamiliesService
from .schemas import FamilyCreate, FamilyUpdate, FamilyResponse

router = APIRouter()


@router.get("", response_model=List[FamilyResponse])
def list_families(db: Session = Depends(get_db)):
    """All registered families, newest first"""
    return FamiliesService(db).list_families()


@router.get(
    "/by-key/{family_id}",
    response_model=FamilyResponse,
    responses={404: {"model": ErrorResponse}}
)
def get_family_by_key(family_id: str, db: Session = Depends(get_db)):
    """
    Family lookup by ration card number

    Used after scanning the QR code printed on the card.
    """
    return FamiliesService(db).get_family_by_key(family_id)


# Path kept for clients of the first API version
router.add_api_route(
    "/by-family-id/{family_id}",
    get_family_by_key,
    methods=["GET"],
    response_model=FamilyResponse,
    include_in_schema=False
)


@router.get("/{family_pk}", response_model=FamilyResponse, responses={404: {"model": ErrorResponse}})
def get_family(family_pk: int, db: Session = Depends(get_db)):
    return FamiliesService(db).get_family(family_pk)


@router.post(
    "",
    response_model=FamilyResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}}
)
def create_family(family_data: FamilyCreate, db: Session = Depends(get_db)):
    """
    Register a family

    **Validation:**
    - Every field except aadhaar and cardType is required
    - familyId must be unique (409 otherwise)
    """
    return FamiliesService(db).create_family(family_data)


@router.put(
    "/{family_pk}",
    response_model=FamilyResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}}
)
def update_family(family_pk: int, family_data: FamilyUpdate, db: Session = Depends(get_db)):
    return FamiliesService(db).update_family(family_pk, family_data)


@router.delete("/{family_pk}", response_model=MessageResponse, responses={404: {"model": ErrorResponse}})
def delete_family(family_pk: int, db: Session = Depends(get_db)):
    """Delete a family; its past sales are kept"""
    FamiliesService(db).delete_family(family_pk)
    return MessageResponse(message="Family deleted successfully", id=family_pk)
