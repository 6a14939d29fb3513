from inventory.extensions import db
from inventory.models.material import Material, MaterialRow


class MaterialRepo:
    @staticmethod
    def list_all():
        rows = MaterialRow.query.order_by(MaterialRow.created_at, MaterialRow.id).all()
        return [r.to_record() for r in rows]

    @staticmethod
    def get(material_id: str):
        row = db.session.get(MaterialRow, material_id)
        return row.to_record() if row else None

    @staticmethod
    def create(material: Material):
        row = MaterialRow()
        row.apply(material)
        db.session.add(row)
        MaterialRepo.commit()
        return material

    @staticmethod
    def update(material: Material):
        row = db.session.get(MaterialRow, material.id)
        if row is None:
            row = MaterialRow()
            db.session.add(row)
        row.apply(material)
        MaterialRepo.commit()
        return material

    @staticmethod
    def delete(material_id: str):
        row = db.session.get(MaterialRow, material_id)
        if row is not None:
            db.session.delete(row)
            MaterialRepo.commit()

    @staticmethod
    def commit():
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
