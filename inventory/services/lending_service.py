from inventory.constants import MATERIAL_CONDITIONS, STATUS_LOANED
from inventory.services.loan_ledger import LoanLedger
from inventory.services.material_registry import MaterialRegistry
from inventory.utils.validation import parse_int, parse_iso_date, parse_text


class LendingService:
    """
    Lending and return workflows over one registry and one ledger.

    Both collections are passed in explicitly. ``lend`` mirrors the return
    workflow so that loaned units are counted on the material when a loan
    opens and released when it closes.
    """

    def __init__(self, registry: MaterialRegistry, ledger: LoanLedger):
        self.registry = registry
        self.ledger = ledger

    def lend(self, material_id: str, data: dict):
        material = self.registry.get_by_id(material_id)
        if not material:
            raise ValueError("Matériel introuvable")

        quantity = parse_int(data.get("quantity", 1), "quantity")
        if quantity < 1:
            raise ValueError("quantity doit être positive")
        if quantity > material.free_quantity:
            raise ValueError(f"Seulement {material.free_quantity} unité(s) disponible(s)")

        borrower_name = parse_text(data.get("borrower_name"), "borrowerName")
        if not borrower_name:
            raise ValueError("borrowerName obligatoire")

        loan_date = parse_iso_date(data.get("loan_date"), "loanDate")
        expected_return_date = parse_iso_date(data.get("expected_return_date"), "expectedReturnDate")
        if loan_date and expected_return_date and expected_return_date < loan_date:
            raise ValueError("expectedReturnDate avant loanDate")

        loan = self.ledger.create_loan({
            "material_id": material.id,
            "quantity": quantity,
            "borrower_name": borrower_name,
            "borrower_contact": parse_text(data.get("borrower_contact"), "borrowerContact") or "",
            "loan_date": loan_date,
            "expected_return_date": expected_return_date,
            "condition_at_loan": material.condition,
            "notes": parse_text(data.get("notes"), "notes"),
        })

        loaned = (material.loaned_quantity or 0) + quantity
        changes = {"loaned_quantity": loaned}
        if material.quantity - loaned <= 0:
            changes["status"] = STATUS_LOANED
        self.registry.update(material.id, changes)

        return loan

    def return_loan(self, loan_id: str, condition: str):
        if condition not in MATERIAL_CONDITIONS:
            raise ValueError(f"condition invalide: {condition}")

        loan = self.ledger.get(loan_id)
        if not loan:
            raise ValueError("Prêt introuvable")
        if not loan.is_active:
            raise ValueError("Ce prêt a déjà été rendu")

        return self.ledger.return_material(
            loan_id, condition, self.registry.materials, self.registry.update
        )

    def dashboard(self) -> dict:
        stats = self.registry.stats()
        return {
            "total": stats.total,
            "available": stats.available,
            "loaned": stats.loaned,
            "overdue": len(self.ledger.overdue_loans()),
        }
