from sqlalchemy.orm import Session
from typing import List
import logging

from .repository import FamiliesRepository, DUPLICATE_FAMILY_MESSAGE
from .schemas import FamilyCreate, FamilyUpdate, FamilyResponse
from ration_store.config.settings import settings
from ration_store.core.exceptions import ConflictError, NotFoundError
from ration_store.shared.database.models import Family

logger = logging.getLogger(__name__)

FAMILY_NOT_FOUND = "Family not found"


class FamiliesService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = FamiliesRepository(db)

    def list_families(self) -> List[FamilyResponse]:
        return [FamilyResponse.model_validate(f) for f in self.repository.get_all()]

    def get_family(self, family_pk: int) -> FamilyResponse:
        return FamilyResponse.model_validate(self._get_or_404(family_pk))

    def get_family_by_key(self, family_id: str) -> FamilyResponse:
        """Lookup used by the ration-card scanner"""
        family = self.repository.get_by_family_id(family_id.strip())
        if not family:
            raise NotFoundError(FAMILY_NOT_FOUND, entity="family")
        return FamilyResponse.model_validate(family)

    def create_family(self, family_data: FamilyCreate) -> FamilyResponse:
        """
        Register a family.

        Raises:
            ConflictError: familyId is already registered
        """
        if self.repository.family_id_taken(family_data.family_id):
            raise ConflictError(DUPLICATE_FAMILY_MESSAGE)

        family = self.repository.create(self._to_row(family_data))
        logger.info(f"Family {family.family_id} registered (id={family.id})")
        return FamilyResponse.model_validate(family)

    def update_family(self, family_pk: int, family_data: FamilyUpdate) -> FamilyResponse:
        family = self._get_or_404(family_pk)

        if self.repository.family_id_taken(family_data.family_id, exclude_pk=family_pk):
            raise ConflictError(DUPLICATE_FAMILY_MESSAGE)

        family = self.repository.update(family, self._to_row(family_data))
        logger.info(f"Family {family.family_id} updated (id={family.id})")
        return FamilyResponse.model_validate(family)

    def delete_family(self, family_pk: int) -> None:
        family = self._get_or_404(family_pk)
        self.repository.delete(family)
        logger.info(f"Family {family_pk} deleted")

    def _get_or_404(self, family_pk: int) -> Family:
        family = self.repository.get_by_id(family_pk)
        if not family:
            raise NotFoundError(FAMILY_NOT_FOUND, entity="family")
        return family

    @staticmethod
    def _to_row(family_data: FamilyCreate) -> dict:
        row = family_data.model_dump()
        if settings.derive_member_count:
            row['num_members'] = len(row['member_list'])
        return row
