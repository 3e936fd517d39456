from models.database import Base, get_db, init_db
from models.domain import Assessment, Customer, Device

__all__ = [
    "Base",
    "get_db",
    "init_db",
    "Customer",
    "Device",
    "Assessment",
]
