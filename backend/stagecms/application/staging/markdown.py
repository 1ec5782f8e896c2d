from typing import Any, Dict
from stagecms.domain.exceptions import SchemaError
from stagecms.utils.richtext import TextToRichDocument


def markdown_fields(schema, markdown: str, text_to_rich_document: TextToRichDocument) -> Dict[str, Any]:
    """
    Place markdown into the module's first richtext field (converted),
    or failing that its first textarea field (raw).
    """
    richtext = schema.first_field_of_type("richtext")
    if richtext:
        return {richtext.slug: text_to_rich_document(markdown)}

    textarea = schema.first_field_of_type("textarea")
    if textarea:
        return {textarea.slug: markdown}

    raise SchemaError(
        f"Module type '{schema.type}' has no richtext or textarea field for markdown",
        meta={"module_type": schema.type},
    )
