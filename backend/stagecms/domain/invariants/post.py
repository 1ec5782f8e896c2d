from stagecms.models.post import APPROVED_FIELDS
from stagecms.domain.exceptions import RestrictedFieldError, SchemaError

PATCHABLE_FIELDS = (
    set(APPROVED_FIELDS) - {"type", "translation_of_id"}
) | {"taxonomy_term_ids", "custom_fields"}


def assert_field_patch(patch):
    if not isinstance(patch, dict):
        raise SchemaError("Field patch must be an object")

    restricted = sorted(set(patch) - PATCHABLE_FIELDS)
    if restricted:
        raise RestrictedFieldError(
            f"Fields cannot be staged: {', '.join(restricted)}",
            meta={"fields": restricted},
        )

    custom_fields = patch.get("custom_fields")
    if custom_fields is not None and not isinstance(custom_fields, dict):
        raise SchemaError("custom_fields must be an object keyed by field slug")

    term_ids = patch.get("taxonomy_term_ids")
    if term_ids is not None and not isinstance(term_ids, list):
        raise SchemaError("taxonomy_term_ids must be a list")
