from typing import Any, Dict, Iterable, Optional
from flask import current_app
from stagecms.extensions import db
from stagecms.application.resolution.resolve_post import resolve_post
from stagecms.domain.exceptions import SchemaError
from stagecms.domain.invariants.post_module import assert_order_index, assert_override_payload
from stagecms.domain.module_scope import GlobalScope, ModuleProps
from stagecms.domain.tiers import Mode
from stagecms.models.module_instance import ModuleInstance
from stagecms.models.post import APPROVED_FIELDS, Post
from stagecms.models.post_custom_field_value import PostCustomFieldValue
from stagecms.models.post_module import PostModule
from stagecms.utils.revisions import record_revision
from stagecms.utils.transaction import transactional


REQUIRED_FIELDS = ("type", "slug", "title")


def create_post(
    *,
    data: Dict[str, Any],
    catalog,
    modules: Optional[Iterable[Dict[str, Any]]] = None,
    custom_fields: Optional[Dict[str, Any]] = None,
    actor_id: Optional[int] = None,
) -> Post:
    """
    Create a post with approved fields and approved modules.

    Administrative seed path (templates, imports): rows are written
    straight into the approved tier, locked modules included.

    Edge cases handled:
    - Missing required fields / unknown fields
    - Duplicate slug per type and locale
    - Module payloads failing catalog validation
    - Global modules attached by slug, created when missing
    """
    missing = [field for field in REQUIRED_FIELDS if not data.get(field)]
    if missing:
        raise SchemaError(f"Missing required fields: {', '.join(missing)}", meta={"fields": missing})

    unknown = sorted(set(data) - set(APPROVED_FIELDS))
    if unknown:
        raise SchemaError(f"Unknown post fields: {', '.join(unknown)}", meta={"fields": unknown})

    locale = data.get("locale") or "en"
    existing = (
        Post.query
        .filter(Post.live())
        .filter_by(type=data["type"], locale=locale, slug=data["slug"])
        .first()
    )
    if existing:
        raise SchemaError("A post with this slug already exists", meta={"slug": data["slug"]})

    module_entries = [_check_module_entry(entry, catalog) for entry in modules or []]

    post = Post()
    for field in APPROVED_FIELDS:
        if field in data:
            setattr(post, field, data[field])
    post.locale = locale

    with transactional():
        db.session.add(post)
        db.session.flush()  # ensures post.id is available

        created_globals = {}
        for index, entry in enumerate(module_entries):
            instance = entry["existing_global"] or created_globals.get(entry.get("global_slug"))
            if instance is None:
                instance = ModuleInstance()
                instance.type = entry["type"]
                instance.scope = entry["scope"]
                instance.props = entry["props"]
                if entry["scope"] == "global":
                    instance.global_slug = entry["global_slug"]
                    instance.global_label = entry.get("global_label")
                    created_globals[instance.global_slug] = instance
                db.session.add(instance)
                db.session.flush()

            post_module = PostModule()
            post_module.post_id = post.id
            post_module.module_id = instance.id
            post_module.order_index = entry.get("order_index", index)
            post_module.locked = bool(entry.get("locked", False))
            post_module.overrides = entry.get("overrides")
            db.session.add(post_module)

        for slug, value in (custom_fields or {}).items():
            field_value = PostCustomFieldValue()
            field_value.post_id = post.id
            field_value.field_slug = slug
            field_value.value = value
            db.session.add(field_value)

        db.session.flush()

        record_revision(
            post_id=post.id,
            mode=Mode.SOURCE.value,
            action="create",
            snapshot=resolve_post(post_id=post.id, mode=Mode.SOURCE),
            user_id=actor_id,
        )

    current_app.logger.info("Created post %s with %d modules", post.id, len(module_entries))
    return post


def _check_module_entry(entry: Dict[str, Any], catalog) -> Dict[str, Any]:
    entry = dict(entry)
    module_type = entry.get("type")
    scope = entry.get("scope", "local")
    schema = catalog.get_schema(module_type)

    if scope not in schema.allowed_scopes:
        raise SchemaError(
            f"Scope '{scope}' is not allowed for module type '{module_type}'",
            meta={"module_type": module_type, "scope": scope},
        )

    props = entry.get("props") or dict(schema.default_values)
    if entry.get("order_index") is not None:
        assert_order_index(entry["order_index"])

    overrides = entry.get("overrides")
    if overrides is not None:
        if scope != "global":
            raise SchemaError("Only global modules accept overrides", meta={"module_type": module_type})
        assert_override_payload(overrides)

    entry["scope"] = scope
    entry["props"] = props
    entry["existing_global"] = None

    if scope == "global":
        slug = entry.get("global_slug")
        if not slug:
            raise SchemaError("Global modules require a global_slug", meta={"scope": scope})
        existing = ModuleInstance.query.filter_by(scope="global", global_slug=slug).first()
        if existing and existing.type != module_type:
            raise SchemaError(
                f"Global module '{slug}' is of type '{existing.type}'",
                meta={"global_slug": slug, "module_type": module_type},
            )
        entry["existing_global"] = existing
        base = existing.props if existing else props
        catalog.validate_props(ModuleProps(module_type, GlobalScope(slug).render(base, overrides)))
    else:
        catalog.validate_props(ModuleProps(module_type, props))

    return entry
