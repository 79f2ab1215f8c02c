# ration_store/shared/database/models.py
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Numeric, JSON,
    CheckConstraint, func
)

from ration_store.config.database import Base

# Precision for quantities (kg / litres) and money
QUANTITY_SCALE = 3
QUANTITY = Numeric(12, QUANTITY_SCALE)
MONEY = Numeric(12, 2)


# =====================================================
# TIMESTAMP MIXIN
# =====================================================
class TimestampMixin:
    """Adds created_at and updated_at columns"""
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    updated_at = Column(DateTime, nullable=False, server_default=func.current_timestamp(), onupdate=func.current_timestamp())


# =====================================================
# USERS
# =====================================================

class User(Base):
    """Store operator account"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())


# =====================================================
# RATION STORE
# =====================================================

class Family(Base, TimestampMixin):
    """Registered household entitled to rationed goods"""
    __tablename__ = "families"

    id = Column(Integer, primary_key=True, index=True)
    family_id = Column(String(100), unique=True, nullable=False, index=True)
    head_of_family = Column(String(255), nullable=False)
    num_members = Column(Integer, nullable=False)
    member_list = Column(JSON, nullable=False, default=list)
    address = Column(String(500), nullable=False)
    phone = Column(String(50), nullable=False)
    aadhaar = Column(String(20))
    card_type = Column(String(50))


class StockItem(Base, TimestampMixin):
    """Inventory line with capacity, current quantity and low-stock threshold"""
    __tablename__ = "stock_items"

    id = Column(Integer, primary_key=True, index=True)
    item_name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)
    total_stock = Column(QUANTITY, nullable=False)
    current_stock = Column(QUANTITY, nullable=False)
    threshold = Column(QUANTITY, nullable=False)

    __table_args__ = (
        CheckConstraint("current_stock >= 0", name="ck_stock_items_current_non_negative"),
    )

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.threshold


class Sale(Base):
    """Append-only record of a quantity sold to a family"""
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    family_id = Column(String(100), nullable=False, index=True)
    # No foreign key: deleting an item keeps its historical sales
    item_id = Column(Integer, nullable=False, index=True)
    item_name = Column(String(255), nullable=False)
    quantity = Column(QUANTITY, nullable=False)
    unit_price = Column(MONEY, nullable=False)
    total_amount = Column(MONEY, nullable=False)
    sale_date = Column(DateTime, nullable=False, index=True)
