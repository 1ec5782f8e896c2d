from flask import current_app
from flask_jwt_extended import get_jwt_identity


def current_actor_id():
    """
    Numeric user id from the JWT identity, or None for service tokens.
    """
    identity = get_jwt_identity()
    try:
        return int(identity)
    except (TypeError, ValueError):
        return None


def module_catalog():
    return current_app.extensions["module_catalog"]
