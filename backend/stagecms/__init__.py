import os
from flask import Flask, send_from_directory
from flask_swagger_ui import get_swaggerui_blueprint
from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .catalog import ModuleCatalog
from .catalog.builtin import build_default_catalog
from .middleware.request_logging import request_logging
from .errors import register_error_handlers

OPENAPI_DIR = os.path.join(os.path.dirname(__file__), "api", "v1")
OPENAPI_FILE = "staging_openapi.yaml"
SWAGGER_URL = "/swagger"
API_URL = "/openapi/staging.yaml"


def create_app(config_name: str = "development", catalog: ModuleCatalog | None = None) -> Flask:
    """
    Build the staging service.

    `catalog` replaces the built-in module types; it is frozen here and
    shared read-only by every request.
    """
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.logger.setLevel(app.config["LOG_LEVEL"])

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    catalog = (catalog or build_default_catalog()).freeze()
    app.extensions["module_catalog"] = catalog
    app.logger.info("Module catalog loaded: %s", ", ".join(catalog.types()))

    request_logging(app)
    register_error_handlers(app)
    app.register_blueprint(v1_bp, url_prefix="/api/v1")

    register_docs(app)
    return app


def register_docs(app):
    """OpenAPI document and Swagger UI; both public."""

    @app.route(API_URL, methods=["GET"], endpoint="openapi_staging")
    def serve_openapi():
        return send_from_directory(OPENAPI_DIR, OPENAPI_FILE, mimetype="application/yaml")

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Content Staging API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )
    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)
