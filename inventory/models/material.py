from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from typing import List, Optional

from inventory.constants import STATUS_AVAILABLE
from inventory.extensions import db
from inventory.utils.wire import camel_keys, snake_keys


@dataclass
class Material:
    """One inventory line; may cover several physical units through quantity."""

    id: str
    name: str
    category: str
    location: str
    status: str = STATUS_AVAILABLE
    condition: str = "good"
    quantity: int = 1
    loaned_quantity: int = 0
    subcategory: Optional[str] = None
    serial_number: Optional[str] = None
    reference: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    responsible: Optional[str] = None
    observations: Optional[str] = None
    images: List[str] = field(default_factory=list)
    purchase_date: Optional[str] = None
    value: Optional[float] = None
    description: Optional[str] = None
    associated_to: Optional[str] = None
    usage: Optional[str] = None

    @property
    def free_quantity(self) -> int:
        return self.quantity - self.loaned_quantity

    @classmethod
    def field_names(cls):
        return {f.name for f in fields(cls)}

    @classmethod
    def from_dict(cls, data: dict) -> "Material":
        data = snake_keys(data)
        known = cls.field_names()
        values = {k: v for k, v in data.items() if k in known}
        if values.get("loaned_quantity") is None:
            values["loaned_quantity"] = 0
        if values.get("images") is None:
            values["images"] = []
        return cls(**values)

    def to_dict(self) -> dict:
        return camel_keys(asdict(self))


class MaterialRow(db.Model):
    __tablename__ = "materials"

    id = db.Column(db.String(64), primary_key=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    category = db.Column(db.String(100), nullable=False, index=True)
    subcategory = db.Column(db.String(100), nullable=True)
    location = db.Column(db.String(200), nullable=False)

    status = db.Column(db.String(20), nullable=False, default=STATUS_AVAILABLE)  # available/loaned/in_maintenance/lost
    condition = db.Column(db.String(20), nullable=False, default="good")

    quantity = db.Column(db.Integer, nullable=False, default=1)
    loaned_quantity = db.Column(db.Integer, nullable=False, default=0)

    serial_number = db.Column(db.String(100), nullable=True)
    reference = db.Column(db.String(100), nullable=True)
    brand = db.Column(db.String(100), nullable=True)
    model = db.Column(db.String(100), nullable=True)
    responsible = db.Column(db.String(200), nullable=True)
    observations = db.Column(db.String(1000), nullable=True)
    images = db.Column(db.JSON, nullable=False, default=list)
    purchase_date = db.Column(db.String(10), nullable=True)
    value = db.Column(db.Float, nullable=True)
    description = db.Column(db.String(1000), nullable=True)
    associated_to = db.Column(db.String(200), nullable=True)
    usage = db.Column(db.String(200), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def apply(self, material: Material):
        for k, v in asdict(material).items():
            setattr(self, k, list(v) if k == "images" else v)

    def to_record(self) -> Material:
        return Material(**{k: getattr(self, k) for k in Material.field_names()})
