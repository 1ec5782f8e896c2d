import pytest

from stagecms.catalog import FieldDefinition, ModuleCatalog, ModuleSchema
from stagecms.catalog.builtin import build_default_catalog
from stagecms.domain.exceptions import NotFoundError, SchemaError
from stagecms.domain.module_scope import ModuleProps


@pytest.fixture
def fake_catalog():
    return ModuleCatalog([
        ModuleSchema(
            type="banner",
            name="Banner",
            field_schema=(
                FieldDefinition("headline", "text", required=True),
                FieldDefinition("size", "select", options=("s", "m", "l")),
                FieldDefinition("count", "number"),
            ),
        ),
    ])


def test_validate_accepts_matching_props(fake_catalog):
    fake_catalog.validate("banner", {"headline": "Hi", "size": "m", "count": 3})


def test_validate_rejects_missing_required_key(fake_catalog):
    with pytest.raises(SchemaError) as exc:
        fake_catalog.validate("banner", {"size": "m"})
    assert exc.value.meta["field"] == "headline"


@pytest.mark.parametrize(
    "props",
    [
        {"headline": 42},
        {"headline": "Hi", "size": "xl"},
        {"headline": "Hi", "count": True},
        {"headline": "Hi", "colour": "red"},
    ],
)
def test_validate_rejects_wrong_shapes_and_unknown_keys(fake_catalog, props):
    with pytest.raises(SchemaError):
        fake_catalog.validate("banner", props)


def test_validate_props_uses_tagged_type(fake_catalog):
    with pytest.raises(SchemaError):
        fake_catalog.validate_props(ModuleProps("banner", {}))


def test_unknown_type_is_not_found(fake_catalog):
    with pytest.raises(NotFoundError):
        fake_catalog.get_schema("carousel")


def test_frozen_catalog_refuses_registration(fake_catalog):
    fake_catalog.freeze()
    with pytest.raises(RuntimeError):
        fake_catalog.register(
            ModuleSchema(type="other", name="Other", field_schema=())
        )


def test_duplicate_registration_is_rejected(fake_catalog):
    with pytest.raises(ValueError):
        fake_catalog.register(
            ModuleSchema(type="banner", name="Again", field_schema=())
        )


def test_first_field_of_type():
    catalog = build_default_catalog()
    assert catalog.get_schema("prose").first_field_of_type("richtext").slug == "content"
    assert catalog.get_schema("hero").first_field_of_type("textarea").slug == "subtitle"
    assert catalog.get_schema("gallery").first_field_of_type("richtext") is None


def test_default_values_satisfy_their_own_schema():
    catalog = build_default_catalog()
    for module_type in catalog.types():
        schema = catalog.get_schema(module_type)
        schema.validate(schema.default_values)


def test_app_catalog_is_frozen(app, catalog):
    assert catalog.frozen
    assert "prose" in catalog.types()
