import copy


def normalize_post_fields(post_id, fields, taxonomy_term_ids=None):
    data = {"id": post_id}
    data.update(copy.deepcopy(fields))
    data["taxonomy_term_ids"] = copy.deepcopy(taxonomy_term_ids)
    return data


def normalize_resolved_module(post_module, instance, *, order_index, props, overrides):
    scope = instance.scope_variant

    return {
        "post_module_id": post_module.id,
        "module_id": instance.id,
        "type": instance.type,
        "scope": scope.name,
        "global_slug": instance.global_slug,
        "global_label": instance.global_label,
        "order_index": order_index,
        "locked": bool(post_module.locked),
        "props": copy.deepcopy(props),
        "overrides": copy.deepcopy(overrides) if instance.is_global else None,
    }
