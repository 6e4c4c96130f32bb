# AutoCiclo: Database Models
# Import all models here for SQLAlchemy discovery

from autociclo.models.vehicle import Vehicle                          # noqa
from autociclo.models.part import Part                                # noqa
from autociclo.models.inventory_assignment import InventoryAssignment  # noqa
