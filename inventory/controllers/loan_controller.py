from flask import Blueprint, request

from inventory.utils.responses import json_error, json_ok
from inventory.utils.wire import snake_keys


def create_loan_blueprint(lending):
    ledger = lending.ledger
    loan_bp = Blueprint("loans", __name__)

    @loan_bp.get("/")
    def list_loans():
        status = request.args.get("status", "all")
        if status == "active":
            loans = ledger.active_loans()
        elif status == "overdue":
            loans = ledger.overdue_loans()
        elif status == "all":
            loans = ledger.loans
        else:
            return json_error(f"status inconnu: {status}", 400)
        return json_ok([l.to_dict() for l in loans])

    @loan_bp.get("/<loan_id>")
    def get_loan(loan_id):
        loan = ledger.get(loan_id)
        if not loan:
            return json_error("Prêt introuvable", 404)
        return json_ok(loan.to_dict())

    @loan_bp.post("/")
    def create_loan():
        data = snake_keys(request.get_json(silent=True) or {})
        material_id = data.get("material_id")
        if not material_id:
            return json_error("materialId obligatoire", 400)
        try:
            loan = lending.lend(str(material_id), data)
        except ValueError as e:
            return json_error(str(e), 400)
        return json_ok(loan.to_dict(), 201, id=loan.id)

    @loan_bp.post("/<loan_id>/return")
    def return_loan(loan_id):
        data = request.get_json(silent=True) or {}
        condition = data.get("condition")
        if not condition:
            return json_error("condition obligatoire", 400)
        try:
            loan = lending.return_loan(loan_id, condition)
        except ValueError as e:
            return json_error(str(e), 400)
        return json_ok(loan.to_dict())

    @loan_bp.delete("/<loan_id>")
    def delete_loan(loan_id):
        ledger.delete_loan(loan_id)
        return json_ok()

    return loan_bp
