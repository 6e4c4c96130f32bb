# autociclo/services/seed_service.py
"""
Development helpers: sample data seeding and full database reset.

seed_if_empty() is non-critical. It never raises, so a broken sample batch
cannot stop the application from starting. reset_database() is destructive.
"""

from datetime import date, timedelta

from sqlalchemy import insert

from autociclo.database import Database
from autociclo.models.inventory_assignment import InventoryAssignment
from autociclo.models.part import Part
from autociclo.models.vehicle import Vehicle
from autociclo.schemas.inventory import ExtractionDetails
from autociclo.schemas.part import PartCreate
from autociclo.schemas.vehicle import VehicleCreate
from autociclo.utils.logger import get_logger

logger = get_logger(__name__)


def _days_ago(days: int) -> date:
    return date.today() - timedelta(days=days)


SAMPLE_VEHICLES = [
    dict(plate="1234ABC", make="Seat", model="Ibiza", year=2008, color="Rojo",
         entry_date=_days_ago(40), status="dismantled", purchase_price=450.0, mileage=215000,
         gps_location="40.4168,-3.7038", notes="Siniestro frontal"),
    dict(plate="5678DEF", make="Volkswagen", model="Golf", year=2011, color="Gris",
         entry_date=_days_ago(25), status="dismantling", purchase_price=900.0, mileage=180500,
         gps_location="40.4170,-3.7041"),
    dict(plate="9012GHI", make="Renault", model="Clio", year=2006, color="Azul",
         entry_date=_days_ago(12), status="dismantling", purchase_price=300.0, mileage=240300),
    dict(plate="3456JKL", make="Ford", model="Focus", year=2014, color="Blanco",
         entry_date=_days_ago(5), status="complete", purchase_price=1200.0, mileage=132000,
         notes="Motor gripado"),
    dict(plate="7890MNP", make="Peugeot", model="308", year=2012, color="Negro",
         entry_date=_days_ago(1), status="complete", purchase_price=750.0, mileage=198700),
]

SAMPLE_PARTS = [
    dict(code="MOT-001", name="Motor 1.9 TDI", category="engine", sale_price=650.0,
         available_stock=1, minimum_stock=1, storage_location="Almacén motores",
         compatible_makes="Seat,Volkswagen"),
    dict(code="MOT-002", name="Alternador", category="engine", sale_price=85.0,
         available_stock=3, minimum_stock=2, storage_location="Estantería A1"),
    dict(code="CAR-001", name="Puerta delantera izquierda", category="body", sale_price=120.0,
         available_stock=0, minimum_stock=1, storage_location="Almacén carrocería"),
    dict(code="CAR-002", name="Capó", category="body", sale_price=95.0,
         available_stock=2, minimum_stock=1, storage_location="Almacén carrocería"),
    dict(code="INT-001", name="Asiento conductor", category="interior", sale_price=70.0,
         available_stock=1, minimum_stock=2, storage_location="Estantería B1"),
    dict(code="ELE-001", name="Centralita motor", category="electronics", sale_price=140.0,
         available_stock=4, minimum_stock=1, storage_location="Estantería C1"),
    dict(code="RUE-001", name="Llanta aleación 16\"", category="wheels", sale_price=45.0,
         available_stock=8, minimum_stock=4, storage_location="Almacén ruedas"),
    dict(code="OTR-001", name="Catalizador", category="other", sale_price=110.0,
         available_stock=1, minimum_stock=1, storage_location="Estantería B2"),
]

# (vehicle index, part index, extraction fields)
SAMPLE_ASSIGNMENTS = [
    (0, 0, dict(quantity=1, condition="used", extraction_date=_days_ago(35), unit_price=650.0)),
    (0, 2, dict(quantity=1, condition="used", extraction_date=_days_ago(34), unit_price=120.0)),
    (0, 6, dict(quantity=4, condition="used", extraction_date=_days_ago(33), unit_price=45.0)),
    (1, 1, dict(quantity=1, condition="repaired", extraction_date=_days_ago(20), unit_price=85.0,
                notes="Escobillas nuevas")),
    (1, 5, dict(quantity=1, condition="used", extraction_date=_days_ago(18), unit_price=140.0)),
    (2, 3, dict(quantity=1, condition="used", extraction_date=_days_ago(10), unit_price=95.0)),
    (2, 4, dict(quantity=1, condition="used", extraction_date=_days_ago(9), unit_price=70.0)),
    (2, 7, dict(quantity=1, condition="new", extraction_date=_days_ago(8), unit_price=110.0)),
]


def _insert_samples(db: Database):
    vehicle_ids = [
        db.execute(insert(Vehicle.__table__).values(**VehicleCreate(**data).model_dump())).inserted_id
        for data in SAMPLE_VEHICLES
    ]
    part_ids = [
        db.execute(insert(Part.__table__).values(**PartCreate(**data).model_dump())).inserted_id
        for data in SAMPLE_PARTS
    ]
    for vehicle_index, part_index, fields in SAMPLE_ASSIGNMENTS:
        values = ExtractionDetails(**fields).model_dump()
        db.execute(insert(InventoryAssignment.__table__).values(
            vehicle_id=vehicle_ids[vehicle_index], part_id=part_ids[part_index], **values
        ))


def seed_if_empty(db: Database) -> bool:
    """
    Insert the sample batch when the vehicles table is empty.
    Returns True if data was inserted. Errors are logged, never raised.
    """
    try:
        existing = db.count("vehicles")
        if existing > 0:
            logger.info(f"Seed skipped: {existing} vehicles already present")
            return False
        db.run_in_transaction(lambda: _insert_samples(db))
    except Exception as e:
        logger.error(f"❌ Sample data seeding failed (ignored): {e}", exc_info=True)
        return False

    logger.info(
        f"🌱 Sample data inserted: {len(SAMPLE_VEHICLES)} vehicles, "
        f"{len(SAMPLE_PARTS)} parts, {len(SAMPLE_ASSIGNMENTS)} assignments"
    )
    return True


def reset_database(db: Database):
    """Drop every table (assignments, parts, vehicles) and recreate the schema."""
    logger.warning("⚠️  Resetting database, all data will be lost")
    db.drop_tables()
    db.init()
