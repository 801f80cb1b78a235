from flask import Flask
from .extensions import db, migrate, login_manager
from .config import get_config


def create_app(config_name=None):
    app = Flask(__name__, instance_relative_config=True)
    config = get_config(config_name)
    app.config.from_object(config)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # Init extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        from .models.user import User
        return db.session.get(User, int(user_id))

    # Ensure models (and the journaling listeners) are registered before
    # 'flask db migrate' or the first flush
    with app.app_context():
        from . import models  # noqa: F401

    app.logger.debug("projtrack app created with %s", config.__name__)
    return app

# For flask run (PowerShell):
# $env:FLASK_APP = "projtrack.app:create_app"
# flask shell
