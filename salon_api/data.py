# salon_api/data.py

import logging

from sqlmodel import Session, select

from .models import Service

logger = logging.getLogger(__name__)

# Starter catalog: (name, description, price, duration_minutes, category)
SERVICES = [
    ("Classic Manicure", "Shape, cuticle care and polish", 25.0, 30, "MANICURE"),
    ("Spa Pedicure", "Soak, scrub, massage and polish", 45.0, 60, "PEDICURE"),
    ("Gel Manicure", "Long-wear gel polish", 40.0, 45, "GEL"),
    ("Gel Removal", "Gentle soak-off removal", 15.0, 30, "GEL"),
    ("Nail Art (per set)", "Custom hand-painted designs", 30.0, 60, "NAIL_ART"),
    ("Paraffin Treatment", "Moisturizing paraffin wax dip", 20.0, 30, "TREATMENT"),
    ("Full Set Acrylics", "Acrylic extensions with gel finish", 65.0, 90, "NAIL_ART"),
]


def seed_services(session: Session) -> int:
    """Inserts the starter catalog into an empty services table."""
    if session.exec(select(Service)).first() is not None:
        return 0

    for name, description, price, duration, category in SERVICES:
        session.add(Service(
            name=name,
            description=description,
            price=price,
            duration_minutes=duration,
            category=category,
        ))
    session.commit()
    logger.info("Seeded %d services", len(SERVICES))
    return len(SERVICES)
