from unittest import TestCase
from unittest.mock import Mock

from inventory.models.material import Material
from inventory.services.loan_ledger import LoanLedger

TODAY = "2025-06-15"


def _loan_fields(**kw):
    data = {
        "material_id": "m1",
        "quantity": 6,
        "borrower_name": "Jean Dupont",
        "borrower_contact": "jean.dupont@example.org",
        "loan_date": "2025-05-02",
        "expected_return_date": "2025-06-01",
        "condition_at_loan": "good",
    }
    data.update(kw)
    return data


class LoanLedgerQueryTests(TestCase):
    def setUp(self):
        self.ledger = LoanLedger(today=lambda: TODAY)

    def test_expected_return_defaults_to_thirty_days(self):
        loan = self.ledger.create_loan(_loan_fields(loan_date="2025-01-15", expected_return_date=None))
        self.assertEqual(loan.expected_return_date, "2025-02-14")

    def test_loan_date_defaults_to_today(self):
        loan = self.ledger.create_loan(_loan_fields(loan_date=None, expected_return_date=None))
        self.assertEqual(loan.loan_date, TODAY)
        self.assertEqual(loan.expected_return_date, "2025-07-15")

    def test_create_assigns_unique_ids(self):
        a = self.ledger.create_loan(_loan_fields())
        b = self.ledger.create_loan(_loan_fields())
        self.assertNotEqual(a.id, b.id)
        self.assertTrue(a.is_active)

    def test_overdue_includes_open_past_due_loan(self):
        loan = self.ledger.create_loan(_loan_fields())
        self.assertEqual(self.ledger.overdue_loans(), [loan])

    def test_overdue_excludes_returned_loan(self):
        self.ledger.create_loan(_loan_fields(actual_return_date="2025-06-10"))
        self.assertEqual(self.ledger.overdue_loans(), [])
        self.assertEqual(self.ledger.active_loans(), [])

    def test_overdue_excludes_due_today(self):
        self.ledger.create_loan(_loan_fields(expected_return_date=TODAY))
        self.assertEqual(self.ledger.overdue_loans(), [])

    def test_overdue_with_explicit_today(self):
        self.ledger.create_loan(_loan_fields())
        self.assertEqual(self.ledger.overdue_loans(today="2025-05-20"), [])

    def test_loans_for_material_and_delete(self):
        a = self.ledger.create_loan(_loan_fields())
        self.ledger.create_loan(_loan_fields(material_id="m2"))
        self.assertEqual(self.ledger.loans_for_material("m1"), [a])
        self.ledger.delete_loan(a.id)
        self.assertIsNone(self.ledger.get(a.id))
        self.ledger.delete_loan("missing")
        self.assertEqual(len(self.ledger.loans), 1)


class ReturnMaterialTests(TestCase):
    def setUp(self):
        self.ledger = LoanLedger(today=lambda: TODAY)
        self.material = Material.from_dict({
            "id": "m1", "name": "Bouées", "category": "Eau Libre", "location": "Limoges",
            "quantity": 6, "loaned_quantity": 6, "status": "loaned", "condition": "good",
        })
        self.loan = self.ledger.create_loan(_loan_fields())
        self.update = Mock()

    def test_return_closes_loan_and_reconciles_material(self):
        closed = self.ledger.return_material(self.loan.id, "excellent", [self.material], self.update)

        self.assertEqual(closed.actual_return_date, TODAY)
        self.assertEqual(closed.condition_at_return, "excellent")
        self.assertFalse(self.ledger.get(self.loan.id).is_active)
        self.update.assert_called_once_with("m1", {
            "condition": "excellent",
            "loaned_quantity": 0,
            "status": "available",
        })

    def test_loaned_quantity_floors_at_zero(self):
        material = Material.from_dict({**self.material.to_dict(), "loanedQuantity": 2})
        self.ledger.return_material(self.loan.id, "good", [material], self.update)
        self.assertEqual(self.update.call_args[0][1]["loaned_quantity"], 0)

    def test_status_reverts_even_with_other_open_loans(self):
        other = self.ledger.create_loan(_loan_fields(quantity=2))
        material = Material.from_dict({**self.material.to_dict(), "quantity": 8, "loanedQuantity": 8})
        self.ledger.return_material(self.loan.id, "good", [material], self.update)

        self.assertTrue(self.ledger.get(other.id).is_active)
        self.assertEqual(self.update.call_args[0][1], {
            "condition": "good", "loaned_quantity": 2, "status": "available",
        })

    def test_unknown_loan_changes_nothing(self):
        before = self.ledger.loans
        self.assertIsNone(self.ledger.return_material("missing", "good", [self.material], self.update))
        self.assertEqual(self.ledger.loans, before)
        self.update.assert_not_called()
        self.assertEqual(self.material.loaned_quantity, 6)

    def test_missing_material_still_closes_loan(self):
        closed = self.ledger.return_material(self.loan.id, "poor", [], self.update)
        self.assertIsNotNone(closed)
        self.assertFalse(self.ledger.get(self.loan.id).is_active)
        self.update.assert_not_called()

    def test_second_return_does_not_decrement_again(self):
        self.ledger.return_material(self.loan.id, "good", [self.material], self.update)
        self.assertIsNone(self.ledger.return_material(self.loan.id, "poor", [self.material], self.update))
        self.assertEqual(self.update.call_count, 1)
        self.assertEqual(self.ledger.get(self.loan.id).condition_at_return, "good")
