from flask import Flask, jsonify

from inventory.config import Config
from inventory.constants import INITIAL_MATERIALS
from inventory.extensions import db, migrate, mail

from inventory.models import loan, material, notification_log  # noqa: F401  (tables for create_all)
from inventory.repositories.loan_repo import LoanRepo
from inventory.repositories.material_repo import MaterialRepo
from inventory.services.lending_service import LendingService
from inventory.services.loan_ledger import LoanLedger
from inventory.services.material_registry import MaterialRegistry
from inventory.services.storage_service import StorageService


def create_app(config_object=None, lending=None, storage=None):
    app = Flask(__name__)
    app.config.from_object(config_object or Config)

    db.init_app(app)
    migrate.init_app(app, db)
    mail.init_app(app)

    # In-memory collections are authoritative, the database mirrors them
    if lending is None:
        lending = LendingService(
            MaterialRegistry(store=MaterialRepo),
            LoanLedger(store=LoanRepo),
        )
    if storage is None:
        storage = StorageService.from_config(app.config)

    with app.app_context():
        db.create_all()
        seed = INITIAL_MATERIALS if app.config.get("SEED_INITIAL_MATERIALS") else None
        lending.registry.load(seed=seed)
        lending.ledger.load()

    from inventory.controllers.loan_controller import create_loan_blueprint
    from inventory.controllers.material_controller import create_material_blueprint
    app.register_blueprint(create_material_blueprint(lending, storage), url_prefix="/materials")
    app.register_blueprint(create_loan_blueprint(lending), url_prefix="/loans")

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    from inventory.tasks.scheduler import start_scheduler
    start_scheduler(app, lending)

    return app
