# stagecms/api/v1/posts.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required
from stagecms.application.posts.create_post import create_post
from stagecms.application.resolution.resolve_post import resolve_post
from stagecms.utils.decorators import current_actor_id, module_catalog
from . import v1_bp


@v1_bp.route("/posts", methods=["POST"])
@jwt_required()
def create_post_route():
    data = request.get_json(silent=True) or {}

    post = create_post(
        data=data.get("post") or {},
        modules=data.get("modules") or [],
        custom_fields=data.get("custom_fields") or {},
        catalog=module_catalog(),
        actor_id=current_actor_id(),
    )

    return jsonify({
        "id": post.id,
        "message": "Post created successfully"
    }), 201


@v1_bp.route("/posts/<post_id>", methods=["GET"])
@jwt_required()
def get_post_route(post_id):
    mode = request.args.get("mode", "source")
    return jsonify(resolve_post(post_id=post_id, mode=mode))
