# autociclo/models/part.py
"""
Catalogued spare part types.
Code is the business key: unique, uppercase, A-Z / 0-9 / hyphen only.
"""

from sqlalchemy import CheckConstraint, Column, Float, Index, Integer, String, Text
from autociclo.database import Base
from autociclo.models.enums import PartCategory, check_in


class Part(Base):
    __tablename__ = "parts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(50), unique=True, nullable=False)
    name = Column(String(200), nullable=False)
    category = Column(String(20), nullable=False)
    sale_price = Column(Float, nullable=False, default=0)
    available_stock = Column(Integer, nullable=False, default=0)
    minimum_stock = Column(Integer, nullable=False, default=1)
    storage_location = Column(String(100))
    compatible_makes = Column(Text)      # comma separated
    image = Column(Text)                 # URI or base64 reference
    description = Column(Text)

    __table_args__ = (
        CheckConstraint(check_in("category", PartCategory), name="ck_parts_category"),
        CheckConstraint("sale_price >= 0", name="ck_parts_sale_price"),
        CheckConstraint("available_stock >= 0", name="ck_parts_available_stock"),
        CheckConstraint("minimum_stock >= 1", name="ck_parts_minimum_stock"),
        Index("idx_parts_code", "code"),
        Index("idx_parts_category", "category"),
        Index("idx_parts_name", "name"),
    )

    def __repr__(self):
        return f"<Part {self.code} {self.name} stock={self.available_stock}/{self.minimum_stock}>"
