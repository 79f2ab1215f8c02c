from sqlalchemy.orm import Session
from sqlalchemy import desc
from typing import Any, Dict, List, Optional

from ration_store.shared.database.models import Family
from ration_store.shared.database.transaction import atomic, reload, run_query

DUPLICATE_FAMILY_MESSAGE = "Family ID already exists"


class FamiliesRepository:
    def __init__(self, db: Session):
        self.db = db

    @run_query("listing families")
    def get_all(self) -> List[Family]:
        """All families, newest first"""
        return self.db.query(Family).order_by(desc(Family.created_at), desc(Family.id)).all()

    @run_query("loading family")
    def get_by_id(self, family_pk: int) -> Optional[Family]:
        return self.db.query(Family).filter(Family.id == family_pk).first()

    @run_query("loading family by key")
    def get_by_family_id(self, family_id: str) -> Optional[Family]:
        """Lookup by the natural key printed on the ration card"""
        return self.db.query(Family).filter(Family.family_id == family_id).first()

    @run_query("checking family key")
    def family_id_taken(self, family_id: str, exclude_pk: Optional[int] = None) -> bool:
        query = self.db.query(Family.id).filter(Family.family_id == family_id)
        if exclude_pk is not None:
            query = query.filter(Family.id != exclude_pk)
        return query.first() is not None

    def create(self, family_data: Dict[str, Any]) -> Family:
        family = Family(**family_data)
        with atomic(self.db, conflict_message=DUPLICATE_FAMILY_MESSAGE):
            self.db.add(family)
        reload(self.db, family)
        return family

    def update(self, family: Family, family_data: Dict[str, Any]) -> Family:
        with atomic(self.db, conflict_message=DUPLICATE_FAMILY_MESSAGE):
            for key, value in family_data.items():
                setattr(family, key, value)
        reload(self.db, family)
        return family

    def delete(self, family: Family) -> None:
        """Unconditional delete; sales keep the family key as plain text"""
        with atomic(self.db):
            self.db.delete(family)
