"""Flask application factory for the Splicer editing API."""

from flask import Flask

from splicer.history import DEFAULT_MAX_DEPTH


def create_app(max_depth: int | None = None) -> Flask:
    app = Flask(__name__)
    app.config["MAX_HISTORY_DEPTH"] = DEFAULT_MAX_DEPTH if max_depth is None else max_depth

    from splicer.web.routes import bp
    app.register_blueprint(bp)

    return app
