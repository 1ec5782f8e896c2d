from flask import current_app, request, jsonify
from flask_jwt_extended import jwt_required
from stagecms.application.revisions.get_revision import get_revision
from stagecms.application.revisions.list_revisions import list_revisions
from stagecms.normalizers.pagination import normalize_pagination
from stagecms.normalizers.revision import normalize_revision
from . import v1_bp


@v1_bp.route("/posts/<post_id>/revisions", methods=["GET"])
@jwt_required()
def list_revisions_route(post_id):
    max_limit = current_app.config["REVISIONS_PAGE_LIMIT"]
    limit = min(request.args.get("limit", 20, type=int), max_limit)

    revisions, meta = list_revisions(
        post_id=post_id,
        limit=limit,
        cursor=request.args.get("cursor"),
        mode=request.args.get("mode"),
    )

    return jsonify(normalize_pagination(revisions, normalize_revision, cursor=meta))


@v1_bp.route("/posts/<post_id>/revisions/<revision_id>", methods=["GET"])
@jwt_required()
def get_revision_route(post_id, revision_id):
    revision = get_revision(post_id=post_id, revision_id=revision_id)
    return jsonify(normalize_revision(revision, include_snapshot=True))
