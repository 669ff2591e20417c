from flask import Flask
from .extensions import db, login_manager, migrate, rq


def create_app(config_object='config.Config'):
    """App factory. The ATS JSON surface lives under /ats."""
    app = Flask(__name__)
    app.config.from_object(config_object)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    rq.init_app(app)

    from . import models  # noqa: F401  register tables on the metadata

    @login_manager.user_loader
    def load_user(user_id):
        from .models.user import User
        return db.session.get(User, int(user_id))

    from .blueprints.ats import bp as ats_bp
    app.register_blueprint(ats_bp, url_prefix="/ats")

    return app
