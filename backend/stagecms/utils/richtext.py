# stagecms/utils/richtext.py
"""
Markdown -> rich document conversion.

The staging engine treats this as an opaque collaborator: it only needs
`text_to_rich_document(markdown) -> dict`. This default covers the block
structure agents actually send (headings, paragraphs, lists, quotes, rules);
inline markup is kept as plain text.
"""
import re
from typing import Any, Callable, Dict, List

RichDocument = Dict[str, Any]
TextToRichDocument = Callable[[str], RichDocument]

_HEADING = re.compile(r"^(#{1,6})\s+(.*)$")
_BULLET = re.compile(r"^\s*[-*+]\s+(.*)$")
_ORDERED = re.compile(r"^\s*\d+[.)]\s+(.*)$")
_QUOTE = re.compile(r"^>\s?(.*)$")
_RULE = re.compile(r"^\s*([-*_])(\s*\1){2,}\s*$")


def _text(value: str) -> Dict[str, Any]:
    return {"type": "text", "text": value, "format": 0}


def _block(node_type: str, text: str, **extra) -> Dict[str, Any]:
    node = {"type": node_type, "children": [_text(text)] if text else []}
    node.update(extra)
    return node


def text_to_rich_document(markdown: str) -> RichDocument:
    children: List[Dict[str, Any]] = []
    paragraph: List[str] = []
    current_list: Dict[str, Any] | None = None

    def flush_paragraph():
        if paragraph:
            children.append(_block("paragraph", " ".join(paragraph)))
            paragraph.clear()

    for raw in (markdown or "").splitlines():
        line = raw.rstrip()

        if not line.strip():
            flush_paragraph()
            current_list = None
            continue

        if _RULE.match(line):
            flush_paragraph()
            current_list = None
            children.append({"type": "horizontalrule"})
            continue

        heading = _HEADING.match(line)
        if heading:
            flush_paragraph()
            current_list = None
            children.append(_block("heading", heading.group(2).strip(), tag=f"h{len(heading.group(1))}"))
            continue

        bullet = _BULLET.match(line)
        ordered = None if bullet else _ORDERED.match(line)
        if bullet or ordered:
            flush_paragraph()
            list_type = "bullet" if bullet else "number"
            if current_list is None or current_list["listType"] != list_type:
                current_list = {"type": "list", "listType": list_type, "children": []}
                children.append(current_list)
            item_text = (bullet or ordered).group(1).strip()
            current_list["children"].append(_block("listitem", item_text))
            continue

        quote = _QUOTE.match(line)
        if quote:
            flush_paragraph()
            current_list = None
            children.append(_block("quote", quote.group(1).strip()))
            continue

        current_list = None
        paragraph.append(line.strip())

    flush_paragraph()

    return {
        "root": {
            "type": "root",
            "direction": "ltr",
            "format": "",
            "indent": 0,
            "children": children,
        }
    }
