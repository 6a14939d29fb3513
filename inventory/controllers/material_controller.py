# inventory/controllers/material_controller.py

from flask import Blueprint, current_app, request
from requests import RequestException

from inventory.constants import (
    ALL_CATEGORIES,
    IMAGE_MAX_BYTES,
    IMAGE_MIN_BYTES,
    MATERIAL_CATEGORIES,
    MATERIAL_CONDITIONS,
    MATERIAL_STATUSES,
)
from inventory.utils.responses import json_error, json_ok
from inventory.utils.validation import parse_int, parse_iso_date, parse_str_list, parse_text
from inventory.utils.wire import snake_keys, to_camel

REQUIRED_FIELDS = ("name", "category", "location")
TEXT_FIELDS = (
    "subcategory", "serial_number", "reference", "brand", "model", "responsible",
    "observations", "description", "associated_to", "usage",
)


def _clean_material_fields(data: dict, partial: bool) -> dict:
    """Raise ValueError on the first invalid field; returns snake_case fields."""
    fields = snake_keys(data)
    fields.pop("id", None)

    for k in REQUIRED_FIELDS:
        if k in fields or not partial:
            value = parse_text(fields.get(k), k)
            if not value:
                raise ValueError(f"{k} obligatoire")
            fields[k] = value

    if "category" in fields and fields["category"] not in MATERIAL_CATEGORIES:
        raise ValueError(f"catégorie inconnue: {fields['category']}")

    for k in TEXT_FIELDS:
        if k in fields:
            fields[k] = parse_text(fields[k], to_camel(k))

    if "purchase_date" in fields:
        fields["purchase_date"] = parse_iso_date(fields["purchase_date"], "purchaseDate")

    if "images" in fields:
        fields["images"] = parse_str_list(fields["images"], "images")

    if "quantity" in fields or not partial:
        fields["quantity"] = parse_int(fields.get("quantity", 1), "quantity")
        if fields["quantity"] < 1:
            raise ValueError("quantity doit être au moins 1")

    if "loaned_quantity" in fields:
        fields["loaned_quantity"] = parse_int(fields["loaned_quantity"] or 0, "loanedQuantity")
        if fields["loaned_quantity"] < 0:
            raise ValueError("loanedQuantity ne peut pas être négative")

    if "status" in fields and fields["status"] not in MATERIAL_STATUSES:
        raise ValueError(f"status invalide: {fields['status']}")
    if "condition" in fields and fields["condition"] not in MATERIAL_CONDITIONS:
        raise ValueError(f"condition invalide: {fields['condition']}")

    if fields.get("value") is not None:
        if isinstance(fields["value"], bool) or not isinstance(fields["value"], (int, float)):
            raise ValueError("value doit être un nombre")
        fields["value"] = float(fields["value"])

    return fields


def create_material_blueprint(lending, storage):
    registry = lending.registry
    material_bp = Blueprint("materials", __name__)

    @material_bp.get("/")
    def list_materials():
        category = request.args.get("category", ALL_CATEGORIES)
        term = request.args.get("q", "")
        return json_ok([m.to_dict() for m in registry.filter(category, term)])

    @material_bp.get("/stats")
    def stats():
        return json_ok(lending.dashboard())

    @material_bp.get("/categories")
    def categories():
        return json_ok(MATERIAL_CATEGORIES)

    @material_bp.get("/<material_id>")
    def get_material(material_id):
        m = registry.get_by_id(material_id)
        if not m:
            return json_error("Matériel introuvable", 404)
        return json_ok(m.to_dict())

    @material_bp.post("/")
    def create_material():
        data = request.get_json(silent=True) or {}
        try:
            fields = _clean_material_fields(data, partial=False)
        except ValueError as e:
            return json_error(str(e), 400)
        m = registry.add(fields)
        return json_ok(m.to_dict(), 201, id=m.id)

    @material_bp.route("/<material_id>", methods=["PUT", "PATCH"])
    def update_material(material_id):
        data = request.get_json(silent=True) or {}
        try:
            fields = _clean_material_fields(data, partial=True)
        except ValueError as e:
            return json_error(str(e), 400)
        m = registry.update(material_id, fields)
        if not m:
            return json_error("Matériel introuvable", 404)
        return json_ok(m.to_dict())

    @material_bp.delete("/<material_id>")
    def delete_material(material_id):
        registry.delete(material_id)
        return json_ok()

    @material_bp.post("/<material_id>/images")
    def upload_image(material_id):
        m = registry.get_by_id(material_id)
        if not m:
            return json_error("Matériel introuvable", 404)

        file = request.files.get("file")
        if not file:
            return json_error("Aucun fichier reçu", 400)

        data = file.read()
        if len(data) < IMAGE_MIN_BYTES or len(data) > IMAGE_MAX_BYTES:
            return json_error("Taille de fichier non acceptée (1 Ko - 10 Mo)", 400)

        cfg = current_app.config
        try:
            url = None
            if len(data) > cfg["IMAGE_RESIZE_THRESHOLD"]:
                url = storage.resize(
                    data,
                    width=cfg["IMAGE_RESIZE_WIDTH"],
                    height=cfg["IMAGE_RESIZE_HEIGHT"],
                    fmt=cfg["IMAGE_RESIZE_FORMAT"],
                    quality=cfg["IMAGE_RESIZE_QUALITY"],
                )
            if not url:
                url = storage.upload(data, file.filename, file.mimetype)
        except RequestException as e:
            current_app.logger.warning(f"[storage] upload failed for material {material_id}: {e}")
            return json_error("Erreur lors de l'upload du fichier", 502)

        m = registry.update(material_id, {"images": [url] + list(m.images or [])})
        return json_ok(m.to_dict(), 201, url=url)

    return material_bp
