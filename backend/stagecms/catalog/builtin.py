from . import FieldDefinition, ModuleCatalog, ModuleSchema


def build_default_catalog() -> ModuleCatalog:
    """Module types shipped with the service."""
    return ModuleCatalog([
        ModuleSchema(
            type="prose",
            name="Prose",
            field_schema=(
                FieldDefinition("title", "text"),
                FieldDefinition("content", "richtext", required=True),
                FieldDefinition("background_color", "text"),
            ),
            default_values={
                "content": {"root": {"type": "root", "children": []}},
            },
        ),
        ModuleSchema(
            type="hero",
            name="Hero",
            field_schema=(
                FieldDefinition("title", "text", required=True),
                FieldDefinition("subtitle", "textarea"),
                FieldDefinition("image", "media"),
                FieldDefinition("callouts", "repeater"),
                FieldDefinition(
                    "alignment",
                    "select",
                    options=("left", "center", "right"),
                ),
            ),
            default_values={
                "title": "We invest in the world's potential",
                "subtitle": "Supporting text below the title",
                "callouts": [{"label": "Learn more", "url": "#"}],
                "alignment": "center",
            },
        ),
        ModuleSchema(
            type="callout",
            name="Callout",
            field_schema=(
                FieldDefinition("title", "text", required=True),
                FieldDefinition("body", "textarea"),
                FieldDefinition("link", "link"),
            ),
            default_values={"title": "Get in touch"},
        ),
        ModuleSchema(
            type="faq",
            name="FAQ",
            field_schema=(
                FieldDefinition("title", "text"),
                FieldDefinition("items", "repeater", required=True),
            ),
            default_values={"items": []},
        ),
        ModuleSchema(
            type="gallery",
            name="Gallery",
            field_schema=(
                FieldDefinition("title", "text"),
                FieldDefinition("images", "repeater", required=True),
                FieldDefinition("columns", "number"),
                FieldDefinition("lightbox", "boolean"),
            ),
            default_values={"images": [], "columns": 3, "lightbox": True},
            allowed_scopes=("local",),
        ),
    ])
