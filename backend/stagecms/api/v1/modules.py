from flask import jsonify
from stagecms.utils.decorators import module_catalog
from . import v1_bp


@v1_bp.route("/modules", methods=["GET"])
def list_module_types():
    catalog = module_catalog()
    return jsonify({
        "items": [catalog.get_schema(t).to_dict() for t in catalog.types()]
    })
