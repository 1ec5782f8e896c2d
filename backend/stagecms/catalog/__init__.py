# stagecms/catalog/__init__.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from stagecms.domain.exceptions import NotFoundError, SchemaError
from stagecms.domain.module_scope import ModuleProps


FIELD_TYPES = {
    "text",
    "textarea",
    "richtext",
    "number",
    "boolean",
    "media",
    "link",
    "select",
    "repeater",
    "object",
}


@dataclass(frozen=True)
class FieldDefinition:
    slug: str
    type: str
    required: bool = False
    options: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.type not in FIELD_TYPES:
            raise ValueError(f"Unknown field type: {self.type}")

    def check(self, value: Any) -> Optional[str]:
        """Return a problem description, or None when `value` fits."""
        if value is None:
            return None

        kind = self.type
        if kind in ("text", "textarea"):
            ok = isinstance(value, str)
        elif kind == "richtext":
            ok = isinstance(value, (dict, str))
        elif kind == "number":
            ok = isinstance(value, (int, float)) and not isinstance(value, bool)
        elif kind == "boolean":
            ok = isinstance(value, bool)
        elif kind in ("media", "link"):
            ok = isinstance(value, (str, dict))
        elif kind == "select":
            ok = isinstance(value, str) and (not self.options or value in self.options)
        elif kind == "repeater":
            ok = isinstance(value, list)
        else:
            ok = isinstance(value, dict)

        if ok:
            return None
        return f"Field '{self.slug}' expects {kind}, got {type(value).__name__}"


@dataclass(frozen=True)
class ModuleSchema:
    """
    Schema for one module type.

    Only `validate` and `first_field_of_type` are used by the staging engine;
    merge logic never consults the catalog.
    """

    type: str
    name: str
    field_schema: Tuple[FieldDefinition, ...]
    default_values: Dict[str, Any] = field(default_factory=dict)
    allowed_scopes: Tuple[str, ...] = ("local", "global")
    lockable: bool = True

    def validate(self, props: Dict[str, Any]) -> None:
        if not isinstance(props, dict):
            raise SchemaError(
                f"Props for '{self.type}' must be an object",
                meta={"module_type": self.type},
            )

        known = {f.slug for f in self.field_schema}
        unknown = sorted(set(props) - known)
        if unknown:
            raise SchemaError(
                f"Unknown fields for '{self.type}': {', '.join(unknown)}",
                meta={"module_type": self.type, "fields": unknown},
            )

        for definition in self.field_schema:
            if definition.required and props.get(definition.slug) is None:
                raise SchemaError(
                    f"Missing required field: {definition.slug}",
                    meta={"module_type": self.type, "field": definition.slug},
                )
            problem = definition.check(props.get(definition.slug))
            if problem:
                raise SchemaError(
                    problem,
                    meta={"module_type": self.type, "field": definition.slug},
                )

    def first_field_of_type(self, kind: str) -> Optional[FieldDefinition]:
        for definition in self.field_schema:
            if definition.type == kind:
                return definition
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "name": self.name,
            "fields": [
                {
                    "slug": f.slug,
                    "type": f.type,
                    "required": f.required,
                    "options": list(f.options),
                }
                for f in self.field_schema
            ],
            "default_values": self.default_values,
            "allowed_scopes": list(self.allowed_scopes),
            "lockable": self.lockable,
        }


class ModuleCatalog:
    """
    Registry of module types.

    Populated at boot, then frozen; a frozen catalog is shared read-only
    across requests.
    """

    def __init__(self, schemas: Iterable[ModuleSchema] = ()):
        self._schemas: Dict[str, ModuleSchema] = {}
        self._frozen = False
        for schema in schemas:
            self.register(schema)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, schema: ModuleSchema) -> None:
        if self._frozen:
            raise RuntimeError("Module catalog is frozen")
        if schema.type in self._schemas:
            raise ValueError(f"Module type '{schema.type}' is already registered")
        self._schemas[schema.type] = schema

    def freeze(self) -> "ModuleCatalog":
        self._frozen = True
        return self

    def has(self, module_type: str) -> bool:
        return module_type in self._schemas

    def types(self) -> List[str]:
        return sorted(self._schemas)

    def get_schema(self, module_type: str) -> ModuleSchema:
        schema = self._schemas.get(module_type)
        if schema is None:
            raise NotFoundError(
                f"Module type '{module_type}' is not registered",
                meta={"module_type": module_type},
            )
        return schema

    def validate(self, module_type: str, props: Dict[str, Any]) -> None:
        self.get_schema(module_type).validate(props)

    def validate_props(self, module_props: ModuleProps) -> None:
        self.validate(module_props.type, module_props.fields)
