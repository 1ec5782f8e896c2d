from flask import current_app, jsonify
from stagecms.domain.exceptions import StagingError


def register_error_handlers(app):
    @app.errorhandler(StagingError)
    def handle_staging_error(error):
        if error.status_code >= 500:
            current_app.logger.error("%s: %s", error.code, error)
        else:
            current_app.logger.warning("%s rejected: %s %s", error.code, error, error.meta)

        response = jsonify(error.to_dict())
        response.status_code = error.status_code
        return response
