from typing import Any, Dict, Optional
from flask import current_app
from stagecms.extensions import db
from stagecms.application.resolution.resolve_post import resolve_post
from stagecms.domain.exceptions import SchemaError
from stagecms.domain.invariants.post_module import assert_order_index, assert_override_payload, assert_unlocked
from stagecms.domain.module_scope import ModuleProps
from stagecms.domain.tiers import Mode, coalesce, deep_merge
from stagecms.models.post_module import PostModule
from stagecms.utils.jsonb import coerce_json_object
from stagecms.utils.lookup import get_post_module
from stagecms.utils.revisions import record_revision
from stagecms.utils.richtext import TextToRichDocument, text_to_rich_document as default_converter
from stagecms.utils.transaction import transactional
from .drafts import ai_review_draft_base, touch_ai_review_draft
from .markdown import markdown_fields


def stage_module_update(
    *,
    post_module_id: str,
    catalog,
    overrides: Optional[Dict[str, Any]] = None,
    order_index: Optional[int] = None,
    markdown: Optional[str] = None,
    text_to_rich_document: TextToRichDocument = default_converter,
    actor_id: Optional[int] = None,
) -> PostModule:
    """
    Stage content or order changes for one association in the ai-review tier.

    Design rules:
    - Locked associations are rejected whatever the payload
    - Identity keys (scope, type, global slug) are never overridable
    - Local modules stage props on their own instance; global modules
      stage overrides on the association, so shared content never leaks
    - Order is staged in the draft's module_order map
    """
    post_module = get_post_module(post_module_id)
    assert_unlocked(post_module, "update")

    if overrides is not None:
        assert_override_payload(overrides)

    if order_index is not None:
        assert_order_index(order_index)

    if overrides is None and order_index is None and markdown is None:
        raise SchemaError("No changes provided", meta={"post_module_id": post_module_id})

    instance = post_module.module_instance
    schema = catalog.get_schema(instance.type)

    changes = dict(overrides or {})
    if markdown is not None:
        changes.update(markdown_fields(schema, markdown, text_to_rich_document))

    staged_props = staged_overrides = None
    if changes:
        if instance.is_global:
            staged_overrides = deep_merge(
                coalesce(
                    post_module.ai_review_overrides,
                    post_module.review_overrides,
                    post_module.overrides,
                ),
                changes,
            )
            candidate = instance.scope_variant.render(
                coalesce(instance.ai_review_props, instance.review_props, instance.props),
                staged_overrides,
            )
        else:
            staged_props = deep_merge(
                coalesce(instance.ai_review_props, instance.review_props, instance.props),
                changes,
            )
            candidate = staged_props

        catalog.validate_props(ModuleProps(instance.type, candidate))

    post = post_module.post

    with transactional():
        if staged_overrides is not None:
            post_module.ai_review_overrides = staged_overrides
        if staged_props is not None:
            instance.ai_review_props = staged_props

        if order_index is not None:
            module_order = coerce_json_object(ai_review_draft_base(post).get("module_order"))
            module_order[post_module.id] = order_index
            touch_ai_review_draft(post, actor_id, module_order=module_order)
        else:
            touch_ai_review_draft(post, actor_id)

        db.session.flush()

        record_revision(
            post_id=post.id,
            mode=Mode.AI_REVIEW.value,
            action="stage-module-update",
            snapshot=resolve_post(post_id=post.id, mode=Mode.AI_REVIEW),
            user_id=actor_id,
        )

    current_app.logger.info(
        "Staged update on post_module %s (post %s, fields: %s, order_index: %s)",
        post_module_id,
        post.id,
        ", ".join(sorted(changes)) or "-",
        order_index,
    )
    return post_module
