from typing import Any, Dict, Optional
from flask import current_app
from stagecms.extensions import db
from stagecms.application.resolution.resolve_post import resolve_post
from stagecms.domain.exceptions import SchemaError
from stagecms.domain.invariants.post_module import assert_order_index, assert_override_payload
from stagecms.domain.module_scope import GlobalScope, ModuleProps
from stagecms.domain.tiers import Mode
from stagecms.models.module_instance import ModuleInstance
from stagecms.models.post_module import PostModule
from stagecms.utils.lookup import get_post
from stagecms.utils.order import next_order_index
from stagecms.utils.revisions import record_revision
from stagecms.utils.richtext import TextToRichDocument, text_to_rich_document as default_converter
from stagecms.utils.transaction import transactional
from .drafts import touch_ai_review_draft
from .markdown import markdown_fields


def stage_module_add(
    *,
    post_id: str,
    module_type: str,
    scope: str,
    catalog,
    props: Optional[Dict[str, Any]] = None,
    global_slug: Optional[str] = None,
    global_label: Optional[str] = None,
    order_index: Optional[int] = None,
    locked: bool = False,
    markdown: Optional[str] = None,
    text_to_rich_document: TextToRichDocument = default_converter,
    actor_id: Optional[int] = None,
) -> PostModule:
    """
    Stage a new module on a post in the ai-review tier.

    Edge cases handled:
    - Unknown module type / scope not allowed by the type
    - Global scope without a slug
    - Existing global slug of a different type
    - Existing global: supplied props become this post's overrides
    - Missing global slug: a new global instance is created
    """
    post = get_post(post_id)
    schema = catalog.get_schema(module_type)

    if scope not in ("local", "global") or scope not in schema.allowed_scopes:
        raise SchemaError(
            f"Scope '{scope}' is not allowed for module type '{module_type}'",
            meta={"module_type": module_type, "scope": scope},
        )

    if scope == "global" and not global_slug:
        raise SchemaError("Global modules require a global_slug", meta={"scope": scope})

    if locked and not schema.lockable:
        raise SchemaError(f"Module type '{module_type}' cannot be locked", meta={"module_type": module_type})

    if order_index is not None:
        assert_order_index(order_index)

    props = dict(props or {})
    if markdown is not None:
        props.update(markdown_fields(schema, markdown, text_to_rich_document))

    existing_global = None
    if scope == "global":
        existing_global = ModuleInstance.query.filter_by(scope="global", global_slug=global_slug).first()
        if existing_global and existing_global.type != module_type:
            raise SchemaError(
                f"Global module '{global_slug}' is of type '{existing_global.type}'",
                meta={"global_slug": global_slug, "module_type": module_type},
            )

    overrides = None
    if existing_global:
        # Attach by reference; per-post content goes on the association
        if props:
            assert_override_payload(props)
            overrides = props
        rendered = GlobalScope(global_slug).render(existing_global.props, overrides)
        catalog.validate_props(ModuleProps(module_type, rendered))
    else:
        initial_props = props or dict(schema.default_values)
        catalog.validate_props(ModuleProps(module_type, initial_props))

    if order_index is None:
        order_index = next_order_index(post.id)

    with transactional():
        if existing_global:
            instance = existing_global
        else:
            instance = ModuleInstance()
            instance.type = module_type
            instance.scope = scope
            instance.props = initial_props
            if scope == "global":
                instance.global_slug = global_slug
                instance.global_label = global_label

            db.session.add(instance)
            db.session.flush()  # ensures instance.id is available

        post_module = PostModule()
        post_module.post_id = post.id
        post_module.module_id = instance.id
        post_module.order_index = order_index
        post_module.locked = locked
        post_module.ai_review_overrides = overrides
        post_module.ai_review_added = True

        db.session.add(post_module)
        touch_ai_review_draft(post, actor_id)
        db.session.flush()

        record_revision(
            post_id=post.id,
            mode=Mode.AI_REVIEW.value,
            action="stage-module-add",
            snapshot=resolve_post(post_id=post.id, mode=Mode.AI_REVIEW),
            user_id=actor_id,
        )

    current_app.logger.info(
        "Staged %s module '%s' on post %s (post_module %s, created instance: %s)",
        scope,
        module_type,
        post_id,
        post_module.id,
        existing_global is None,
    )
    return post_module
