"""
Creates the projtrack tables on a fresh database.

    python init_db.py [development|production|testing]

Use `flask db upgrade` instead once the database is under migration control.
"""
import sys

from sqlalchemy.orm import configure_mappers

from projtrack.app import create_app
from projtrack.extensions import db
from projtrack.models import Journal


def init_db(config_name=None):
    app = create_app(config_name)
    with app.app_context():
        db.create_all()
        # journaled classes register themselves when mappers are configured
        configure_mappers()
        app.logger.info(
            "Created %s; journaling %s",
            ", ".join(sorted(db.metadata.tables)),
            ", ".join(sorted(Journal.journaled_classes)),
        )
    return app


if __name__ == "__main__":
    init_db(sys.argv[1] if len(sys.argv) > 1 else None)
