"""
Script to load demo data: one operator account, stock items and families
"""
import logging

from ration_store.config.database import SessionLocal, create_tables
from ration_store.core.auth.service import AuthService
from ration_store.shared.database.models import Family, StockItem, User

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger("seed_data")

DEMO_USER = {"username": "operator", "password": "operator123"}

DEMO_ITEMS = [
    {"item_name": "Rice", "category": "Grain", "total_stock": 500, "current_stock": 420, "threshold": 50},
    {"item_name": "Wheat", "category": "Grain", "total_stock": 400, "current_stock": 35, "threshold": 40},
    {"item_name": "Sugar", "category": "Sugar", "total_stock": 200, "current_stock": 120, "threshold": 20},
    {"item_name": "Palm Oil", "category": "Oil", "total_stock": 150, "current_stock": 90, "threshold": 15},
    {"item_name": "Kerosene", "category": "Fuel", "total_stock": 300, "current_stock": 10, "threshold": 30},
]

DEMO_FAMILIES = [
    {
        "family_id": "RC1001",
        "head_of_family": "Ramesh Kumar",
        "num_members": 4,
        "member_list": ["Ramesh Kumar", "Sita Devi", "Anil Kumar", "Priya Kumari"],
        "address": "12 Gandhi Road, Ward 3",
        "phone": "9876543210",
        "card_type": "BPL",
    },
    {
        "family_id": "RC1002",
        "head_of_family": "Lakshmi Narayanan",
        "num_members": 2,
        "member_list": ["Lakshmi Narayanan", "Meena Lakshmi"],
        "address": "45 Temple Street, Ward 7",
        "phone": "9123456780",
        "card_type": "APL",
    },
]


def seed_data():
    """Insert the demo records unless the store already has data"""

    create_tables()
    db = SessionLocal()

    try:
        if db.query(User).filter(User.username == DEMO_USER["username"]).first() is None:
            db.add(User(
                username=DEMO_USER["username"],
                password_hash=AuthService.get_password_hash(DEMO_USER["password"]),
                is_active=True
            ))
            logger.info(f"User created: {DEMO_USER['username']} / {DEMO_USER['password']}")

        if db.query(StockItem).count() == 0:
            for item_data in DEMO_ITEMS:
                db.add(StockItem(**item_data))
            logger.info(f"{len(DEMO_ITEMS)} stock items created")
        else:
            logger.info("Stock items already present, skipping")

        if db.query(Family).count() == 0:
            for family_data in DEMO_FAMILIES:
                db.add(Family(**family_data))
            logger.info(f"{len(DEMO_FAMILIES)} families created")
        else:
            logger.info("Families already present, skipping")

        db.commit()

    except Exception:
        db.rollback()
        logger.exception("Error loading demo data")
        raise

    finally:
        db.close()


if __name__ == "__main__":
    seed_data()
