"""
Reference data for development and demos.

Five routes (R001 is the baseline) and compliance balances for SHIP001 to
SHIP004 over 2024-2026.
"""

import logging
from typing import Dict, List

from sqlalchemy.orm import Session

from api import models

logger = logging.getLogger(__name__)

SEED_ROUTES: List[Dict] = [
    {
        "route_id": "R001", "vessel_type": "Container", "fuel_type": "HFO",
        "year": 2024, "ghg_intensity": 91.0, "fuel_consumption": 5000,
        "distance": 12000, "total_emissions": 4500, "is_baseline": True,
    },
    {
        "route_id": "R002", "vessel_type": "BulkCarrier", "fuel_type": "LNG",
        "year": 2024, "ghg_intensity": 88.0, "fuel_consumption": 4800,
        "distance": 11500, "total_emissions": 4200, "is_baseline": False,
    },
    {
        "route_id": "R003", "vessel_type": "Tanker", "fuel_type": "MGO",
        "year": 2024, "ghg_intensity": 93.5, "fuel_consumption": 5100,
        "distance": 12500, "total_emissions": 4700, "is_baseline": False,
    },
    {
        "route_id": "R004", "vessel_type": "RoRo", "fuel_type": "HFO",
        "year": 2025, "ghg_intensity": 89.2, "fuel_consumption": 4900,
        "distance": 11800, "total_emissions": 4300, "is_baseline": False,
    },
    {
        "route_id": "R005", "vessel_type": "Container", "fuel_type": "LNG",
        "year": 2025, "ghg_intensity": 90.5, "fuel_consumption": 4950,
        "distance": 11900, "total_emissions": 4400, "is_baseline": False,
    },
]

# (ship_id, year) -> CB in gCO2eq; positive = surplus
SEED_COMPLIANCE: Dict[tuple, float] = {
    ("SHIP001", 2024): 15000,
    ("SHIP002", 2024): -8000,
    ("SHIP003", 2024): 12000,
    ("SHIP004", 2024): -5000,
    ("SHIP001", 2025): 18000,
    ("SHIP002", 2025): -6000,
    ("SHIP003", 2025): 14000,
    ("SHIP004", 2025): -7000,
    ("SHIP001", 2026): 20000,
    ("SHIP002", 2026): -4000,
    ("SHIP003", 2026): 16000,
    ("SHIP004", 2026): -9000,
}


def clear_database(db: Session) -> None:
    """Delete all ledger data, children first."""
    db.query(models.PoolMember).delete()
    db.query(models.Pool).delete()
    db.query(models.BankEntry).delete()
    db.query(models.ShipCompliance).delete()
    db.query(models.Route).delete()


def seed_database(db: Session, clear: bool = True) -> Dict[str, int]:
    """
    Load the reference routes and compliance balances.

    Args:
        db: Open session; committed on success
        clear: Delete existing data first

    Returns:
        Counts of inserted rows per table
    """
    if clear:
        clear_database(db)

    for data in SEED_ROUTES:
        db.add(models.Route(**data))

    for (ship_id, year), cb in SEED_COMPLIANCE.items():
        db.add(models.ShipCompliance(ship_id=ship_id, year=year, cb_gco2eq=cb))

    db.commit()
    counts = {"routes": len(SEED_ROUTES), "ship_compliance": len(SEED_COMPLIANCE)}
    logger.info("Seeded %(routes)d routes and %(ship_compliance)d compliance records", counts)
    return counts
