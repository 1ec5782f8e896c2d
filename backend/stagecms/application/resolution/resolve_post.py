# stagecms/application/resolution/resolve_post.py
from typing import Any, Dict, List
from sqlalchemy.orm import joinedload
from stagecms.domain.tiers import Mode, layered, parse_mode
from stagecms.models.post import APPROVED_FIELDS
from stagecms.models.post_module import PostModule
from stagecms.models.post_custom_field_value import PostCustomFieldValue
from stagecms.normalizers.post import normalize_post_fields, normalize_resolved_module
from stagecms.utils.jsonb import coerce_json_object
from stagecms.utils.lookup import get_post
from stagecms.utils.order import render_sort_key


def resolve_post(
    *,
    post_id: str,
    mode: Mode | str,
) -> Dict[str, Any]:
    """
    Compute the effective view of a post for one tier.

    Every value is read through the same COALESCE chain:
    ai-review -> review -> approved, truncated to the tiers at or
    below `mode`. Pure read: nothing is written.
    """
    mode = parse_mode(mode)
    post = get_post(post_id)

    review = coerce_json_object(post.review_draft)
    ai_review = coerce_json_object(post.ai_review_draft)

    # 1. Effective post fields
    fields = {
        field: layered(
            mode,
            ai_review=ai_review.get(field),
            review=review.get(field),
            source=getattr(post, field),
        )
        for field in APPROVED_FIELDS
    }
    taxonomy_term_ids = layered(
        mode,
        ai_review=ai_review.get("taxonomy_term_ids"),
        review=review.get("taxonomy_term_ids"),
        source=None,
    )
    custom_fields = layered(
        mode,
        ai_review=ai_review.get("custom_fields"),
        review=review.get("custom_fields"),
        source=_approved_custom_fields(post.id),
    )

    # 2-4. Effective modules
    modules = _resolve_modules(
        post.id,
        mode,
        review_order=coerce_json_object(review.get("module_order")),
        ai_review_order=coerce_json_object(ai_review.get("module_order")),
    )

    return {
        "mode": mode.value,
        "post": normalize_post_fields(post.id, fields, taxonomy_term_ids),
        "modules": modules,
        "custom_fields": dict(custom_fields),
    }


def is_visible(post_module: PostModule, mode: Mode) -> bool:
    """Staged additions and deletions only apply at or above their tier."""
    if mode == Mode.SOURCE:
        return not (post_module.review_added or post_module.ai_review_added)
    if mode == Mode.REVIEW:
        return not (post_module.ai_review_added or post_module.review_deleted)
    return not (post_module.review_deleted or post_module.ai_review_deleted)


def _resolve_modules(post_id, mode, *, review_order, ai_review_order) -> List[Dict[str, Any]]:
    rows = (
        PostModule.query
        .options(joinedload(PostModule.module_instance))
        .filter_by(post_id=post_id)
        .order_by(
            PostModule.order_index.asc(),
            PostModule.created_at.asc(),
            PostModule.id.asc(),
        )
        .all()
    )

    entries = []
    for post_module in rows:
        if not is_visible(post_module, mode):
            continue

        instance = post_module.module_instance
        order_index = layered(
            mode,
            ai_review=ai_review_order.get(post_module.id),
            review=review_order.get(post_module.id),
            source=post_module.order_index,
        )
        props = layered(
            mode,
            ai_review=instance.ai_review_props,
            review=instance.review_props,
            source=instance.props,
        )
        overrides = layered(
            mode,
            ai_review=post_module.ai_review_overrides,
            review=post_module.review_overrides,
            source=post_module.overrides,
        )
        entries.append((
            render_sort_key(order_index, post_module),
            normalize_resolved_module(
                post_module,
                instance,
                order_index=order_index,
                props=instance.scope_variant.render(props, overrides),
                overrides=overrides,
            ),
        ))

    entries.sort(key=lambda entry: entry[0])
    return [module for _, module in entries]


def _approved_custom_fields(post_id) -> Dict[str, Any]:
    values = (
        PostCustomFieldValue.query
        .filter_by(post_id=post_id)
        .order_by(PostCustomFieldValue.field_slug.asc())
        .all()
    )
    return {value.field_slug: value.value for value in values}
