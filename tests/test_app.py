import logging

from sqlalchemy import inspect

from init_db import init_db
from projtrack.extensions import db


def test_testing_config_is_applied(app):
    assert app.config["TESTING"] is True
    assert app.config["SQLALCHEMY_DATABASE_URI"] == "sqlite:///:memory:"
    assert app.logger.level == logging.getLevelName(app.config["LOG_LEVEL"])


def test_init_db_creates_journal_tables():
    app = init_db("testing")

    with app.app_context():
        tables = inspect(db.engine).get_table_names()
    assert {"journal", "issue", "project", "wiki_page", "user"} <= set(tables)
