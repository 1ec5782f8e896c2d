from flask import jsonify
from stagecms.utils.decorators import module_catalog
from . import v1_bp


@v1_bp.route("/health", methods=["GET"])
def health_check():
    return jsonify({
        "status": "ok",
        "service": "content-staging",
        "module_types": len(module_catalog().types()),
    })
