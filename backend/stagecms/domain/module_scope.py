from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class LocalScope:
    """Instance owned by exactly one post."""

    name = "local"

    def render(self, props: Optional[Dict[str, Any]], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return dict(props or {})


@dataclass(frozen=True)
class GlobalScope:
    """
    Instance shared by slug across many posts.

    Per-post customization lives on the association; it is shallow-merged
    over the shared base and never written back to it.
    """

    slug: str
    label: Optional[str] = None

    name = "global"

    def render(self, props: Optional[Dict[str, Any]], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return {**(props or {}), **(overrides or {})}


ModuleScope = Union[LocalScope, GlobalScope]


@dataclass(frozen=True)
class ModuleProps:
    """Props payload tagged with its catalog type."""

    type: str
    fields: Dict[str, Any] = field(default_factory=dict)
