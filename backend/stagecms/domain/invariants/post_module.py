from stagecms.domain.exceptions import LockedModuleError, RestrictedFieldError, SchemaError

# Identify the module; never rewritten through content-edit overrides.
RESTRICTED_OVERRIDE_KEYS = {"scope", "type", "global_slug", "globalSlug"}


def assert_unlocked(post_module, operation):
    """Locked associations are read-only to the agent-facing staging path."""
    if post_module.locked:
        raise LockedModuleError(
            f"Cannot {operation} a locked module",
            meta={"post_module_id": post_module.id, "operation": operation},
        )


def assert_override_payload(overrides):
    if not isinstance(overrides, dict):
        raise SchemaError("Overrides must be an object")

    restricted = sorted(RESTRICTED_OVERRIDE_KEYS & set(overrides))
    if restricted:
        raise RestrictedFieldError(
            f"Overrides may not change: {', '.join(restricted)}",
            meta={"fields": restricted},
        )


def assert_order_index(order_index):
    # bool is an int subclass; neither it nor numeric strings sort with ints
    if isinstance(order_index, bool) or not isinstance(order_index, int):
        raise SchemaError(
            "order_index must be an integer",
            meta={"order_index": order_index},
        )
