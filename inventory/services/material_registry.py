import logging
import uuid
from collections import namedtuple
from dataclasses import replace

from sqlalchemy.exc import SQLAlchemyError

from inventory.constants import ALL_CATEGORIES
from inventory.models.material import Material

logger = logging.getLogger(__name__)

MaterialStats = namedtuple("MaterialStats", ["total", "loaned", "available"])

# fields the search box looks at
SEARCH_FIELDS = ("name", "location", "brand", "model")


def _new_id() -> str:
    return uuid.uuid4().hex


def _as_list(images):
    if not images:
        return []
    if isinstance(images, str):
        return [images]
    return list(images)


class MaterialRegistry:
    """
    In-memory collection of materials, kept in insertion order.

    The collection is authoritative. When a ``store`` is given, every
    mutation is mirrored to it after the local change; a failing store is
    logged and otherwise ignored, so local and stored state may diverge.
    Records are replaced on update rather than mutated, which keeps the
    lists returned by ``materials`` stable snapshots.
    """

    def __init__(self, materials=None, store=None, id_factory=None):
        self._materials = list(materials or [])
        self._store = store
        self._new_id = id_factory or _new_id

    @property
    def materials(self):
        return list(self._materials)

    def load(self, seed=None):
        """Hydrate from the store; seed it when it holds nothing yet."""
        if self._store is None:
            return
        stored = self._store.list_all()
        if not stored and seed:
            stored = [Material.from_dict(m) for m in seed]
            for m in stored:
                self._mirror("create", m)
        self._materials = list(stored)
        logger.info(f"[registry] {len(self._materials)} materials loaded")

    def add(self, fields: dict) -> Material:
        data = dict(fields)
        data["id"] = self._new_id()
        if "images" in data:
            data["images"] = _as_list(data["images"])
        material = Material.from_dict(data)
        self._materials.append(material)
        self._mirror("create", material)
        return material

    def update(self, material_id: str, fields: dict):
        known = Material.field_names() - {"id"}
        changes = {k: v for k, v in fields.items() if k in known}
        if "images" in changes:
            changes["images"] = _as_list(changes["images"])

        for i, m in enumerate(self._materials):
            if m.id == material_id:
                updated = replace(m, **changes)
                self._materials[i] = updated
                self._mirror("update", updated)
                return updated
        return None

    def delete(self, material_id: str):
        before = len(self._materials)
        self._materials = [m for m in self._materials if m.id != material_id]
        if len(self._materials) != before:
            self._mirror("delete", material_id)

    def get_by_id(self, material_id: str):
        return next((m for m in self._materials if m.id == material_id), None)

    def filter(self, category: str = ALL_CATEGORIES, search_term: str = ""):
        term = (search_term or "").lower()

        def matches(m: Material) -> bool:
            if category != ALL_CATEGORIES and m.category != category:
                return False
            return any(term in str(getattr(m, f) or "").lower() for f in SEARCH_FIELDS)

        return [m for m in self._materials if matches(m)]

    def stats(self) -> MaterialStats:
        total = sum(m.quantity for m in self._materials)
        loaned = sum(m.loaned_quantity or 0 for m in self._materials)
        return MaterialStats(total=total, loaned=loaned, available=total - loaned)

    def _mirror(self, action: str, *args):
        if self._store is None:
            return
        try:
            getattr(self._store, action)(*args)
        except SQLAlchemyError as e:
            logger.warning(f"[registry] {action} mirror failed, keeping local state: {e}")
