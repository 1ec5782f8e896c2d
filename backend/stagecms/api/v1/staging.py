# stagecms/api/v1/staging.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required
from stagecms.application.staging.stage_field_patch import stage_field_patch
from stagecms.application.staging.stage_module_add import stage_module_add
from stagecms.application.staging.stage_module_update import stage_module_update
from stagecms.application.staging.stage_module_remove import stage_module_remove
from stagecms.application.staging.promote_ai_review import promote_ai_review_to_review
from stagecms.application.staging.reject_draft import reject_draft
from stagecms.utils.decorators import current_actor_id, module_catalog
from stagecms.utils.lookup import get_post
from stagecms.utils.optimistic_lock import enforce_optimistic_lock
from . import v1_bp


# ------------------------
# Post fields
# ------------------------

@v1_bp.route("/posts/<post_id>/ai-review", methods=["PATCH"])
@jwt_required()
def stage_field_patch_route(post_id):
    # -----------------------
    # Optimistic Locking Check
    # -----------------------
    enforce_optimistic_lock(get_post(post_id))

    data = request.get_json(silent=True) or {}

    draft = stage_field_patch(
        post_id=post_id,
        patch=data.get("patch", data),
        actor_id=current_actor_id(),
    )

    return jsonify({"ai_review_draft": draft, "message": "Draft staged"}), 200


# ------------------------
# Modules
# ------------------------

@v1_bp.route("/posts/<post_id>/modules", methods=["POST"])
@jwt_required()
def stage_module_add_route(post_id):
    data = request.get_json(silent=True) or {}

    post_module = stage_module_add(
        post_id=post_id,
        module_type=data.get("type"),
        scope=data.get("scope", "local"),
        props=data.get("props"),
        global_slug=data.get("global_slug"),
        global_label=data.get("global_label"),
        order_index=data.get("order_index"),
        locked=bool(data.get("locked", False)),
        markdown=data.get("markdown"),
        catalog=module_catalog(),
        actor_id=current_actor_id(),
    )

    return jsonify({
        "post_module_id": post_module.id,
        "module_id": post_module.module_id,
        "order_index": post_module.order_index,
        "message": "Module staged"
    }), 201


@v1_bp.route("/post-modules/<post_module_id>", methods=["PATCH"])
@jwt_required()
def stage_module_update_route(post_module_id):
    data = request.get_json(silent=True) or {}

    stage_module_update(
        post_module_id=post_module_id,
        overrides=data.get("overrides"),
        order_index=data.get("order_index"),
        markdown=data.get("markdown"),
        catalog=module_catalog(),
        actor_id=current_actor_id(),
    )

    return jsonify({"message": "Module update staged"}), 200


@v1_bp.route("/post-modules/<post_module_id>", methods=["DELETE"])
@jwt_required()
def stage_module_remove_route(post_module_id):
    stage_module_remove(post_module_id=post_module_id, actor_id=current_actor_id())
    return jsonify({"message": "Module removal staged"}), 200


# ------------------------
# Tiers
# ------------------------

@v1_bp.route("/posts/<post_id>/promote-ai-review", methods=["POST"])
@jwt_required()
def promote_ai_review_route(post_id):
    result = promote_ai_review_to_review(post_id=post_id, actor_id=current_actor_id())
    return jsonify({**result, "message": "AI review promoted to review"}), 200


@v1_bp.route("/posts/<post_id>/reject", methods=["POST"])
@jwt_required()
def reject_draft_route(post_id):
    mode = request.args.get("mode", "ai-review")
    result = reject_draft(post_id=post_id, mode=mode, actor_id=current_actor_id())
    return jsonify({**result, "message": f"{mode} draft rejected"}), 200
