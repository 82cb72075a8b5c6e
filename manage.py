#!/usr/bin/env python3
"""
Script di gestione per l'applicazione Flask NoteLog.

Uso:
    python manage.py runserver                  # Avvia il server di sviluppo
    python manage.py create-db                  # Crea le tabelle del database
    python manage.py delete-user --email a@x.com  # Elimina un utente (fuori banda)
"""

import argparse
import logging
import os
import sys

from sqlalchemy.exc import OperationalError as SAOperationalError
from pymysql.err import OperationalError as MySQLOperationalError

from notelog import create_app
from notelog.extensions import db
from config import DevConfig

# ---------------------------------------------------------------------
# Logger CLI (fuori dal contesto Flask)
# ---------------------------------------------------------------------
cli_logger = logging.getLogger("manage_cli")
cli_logger.setLevel(logging.INFO)

if not cli_logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(levelname)s: %(name)s: %(message)s")
    )
    cli_logger.addHandler(handler)


# ---------------------------------------------------------------------
# Utility
# ---------------------------------------------------------------------
def _import_all_models() -> None:
    """Assicura che tutti i modelli siano registrati prima di create_all()."""
    import notelog.models  # noqa: F401


# ---------------------------------------------------------------------
# Comandi
# ---------------------------------------------------------------------
def create_db(app) -> bool:
    """Crea tutte le tabelle del database definite nei modelli SQLAlchemy."""
    with app.app_context():
        cli_logger.info("Tentativo di creare tutte le tabelle nel database...")
        try:
            _import_all_models()
            db.create_all()
            cli_logger.info("Database creato con successo.")
            return True
        except (SAOperationalError, MySQLOperationalError) as e:
            cli_logger.error("Errore di connessione o permessi sul DB: %s", e)
            cli_logger.info(
                "Verifica la stringa di connessione: %s",
                app.config.get("SQLALCHEMY_DATABASE_URI"),
            )
            return False


def delete_user(app, email: str) -> bool:
    """
    Elimina un utente direttamente dal DB.

    I token già emessi per l'utente vengono rifiutati alla richiesta
    successiva (controllo di esistenza nel middleware).
    """
    from notelog.services.unit_of_work import UnitOfWork

    with app.app_context():
        with UnitOfWork() as uow:
            user = uow.users.get_by_email(email.strip().lower())
            if user is None:
                cli_logger.error("Nessun utente con email %s", email)
                return False
            uow.users.delete(user)
            uow.commit()
            cli_logger.info("Utente %s eliminato.", email)
            return True


def run_server(app) -> None:
    """Avvia il server di sviluppo Flask (LAN-ready)."""
    host = os.environ.get("FLASK_RUN_HOST", "0.0.0.0")
    port = int(os.environ.get("FLASK_RUN_PORT", "5000"))
    debug = app.config.get("DEBUG", False)

    app.logger.info("Avvio del server su http://%s:%s", host, port)
    app.run(host=host, port=port, debug=debug)


# ---------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------
def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Gestione dell'applicazione Flask NoteLog."
    )
    parser.add_argument(
        "command",
        choices=["runserver", "create-db", "delete-user"],
        help="Comando da eseguire.",
    )
    parser.add_argument("--email", help="Email dell'utente (per delete-user).")

    args = parser.parse_args(argv)

    # Crea l'app con configurazione di sviluppo
    app = create_app(DevConfig)

    if args.command == "runserver":
        run_server(app)
        return 0
    if args.command == "create-db":
        return 0 if create_db(app) else 1
    if not args.email:
        parser.error("delete-user richiede --email")
    return 0 if delete_user(app, args.email) else 1


if __name__ == "__main__":
    sys.exit(main())
