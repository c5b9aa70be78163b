from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .type_matcher import TypeExpression, parse_type_expression

# Textual rule table; expressions are parsed once when the registry is built.
_ARTICLE_RULES: Dict[str, Any] = {
    "required": ["headline", "author", "datePublished", "publisher"],
    "recommended": ["image", "dateModified", "articleBody", "description"],
    "expected_type": {
        "headline": "string",
        "author": "object|array",
        "datePublished": "string:date-time",
        "publisher": "object",
        "image": "string|object",
        "dateModified": "string:date-time",
        "articleBody": "string",
        "description": "string",
    },
}

BUILTIN_SCHEMA_RULES: Dict[str, Dict[str, Any]] = {
    "Article": _ARTICLE_RULES,
    "BlogPosting": _ARTICLE_RULES,
    "Event": {
        "required": ["name", "startDate", "location"],
        "recommended": ["image", "description", "endDate", "offers", "performer"],
        "expected_type": {
            "name": "string",
            "startDate": "string:date-time",
            "location": "object",
            "image": "string|object",
            "description": "string",
            "endDate": "string:date-time",
            "offers": "object|array",
            "performer": "object|array",
        },
    },
    "Product": {
        "required": ["name"],
        "recommended": ["image", "description", "offers", "brand", "aggregateRating", "review"],
        "expected_type": {
            "name": "string",
            "image": "string|object|array",
            "description": "string",
            "offers": "object|array",
            "brand": "object",
            "aggregateRating": "object",
            "review": "object|array",
        },
    },
    "FAQPage": {
        "required": ["mainEntity"],
        "recommended": [],
        "expected_type": {"mainEntity": "array"},
    },
    "BreadcrumbList": {
        "required": ["itemListElement"],
        "recommended": [],
        "expected_type": {"itemListElement": "array"},
    },
}


@dataclass(frozen=True)
class SchemaSpec:
    name: str
    required: Tuple[str, ...] = ()
    recommended: Tuple[str, ...] = ()
    expected_type: Mapping[str, TypeExpression] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_rules(cls, name: str, rules: Mapping[str, Any]) -> "SchemaSpec":
        expected = {
            prop: parse_type_expression(text)
            for prop, text in (rules.get("expected_type") or {}).items()
        }
        return cls(
            name=name,
            required=tuple(rules.get("required") or ()),
            recommended=tuple(rules.get("recommended") or ()),
            expected_type=MappingProxyType(expected),
        )

    def expected_type_for(self, prop: str) -> Optional[TypeExpression]:
        return self.expected_type.get(prop)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "required": list(self.required),
            "recommended": list(self.recommended),
            "expected_type": {prop: str(expr) for prop, expr in self.expected_type.items()},
        }


class SchemaRegistry:
    """Read-only table of schema.org type names to validation specs."""

    def __init__(self, specs: Iterable[SchemaSpec]):
        self._specs: Mapping[str, SchemaSpec] = MappingProxyType({spec.name: spec for spec in specs})

    @classmethod
    def from_rules(cls, rules: Mapping[str, Mapping[str, Any]]) -> "SchemaRegistry":
        return cls(SchemaSpec.from_rules(name, spec_rules) for name, spec_rules in rules.items())

    def lookup(self, type_name: Any) -> Optional[SchemaSpec]:
        """Resolve ``@type`` to a spec.

        A list of types resolves to the first registered entry.
        """
        if isinstance(type_name, str):
            return self._specs.get(type_name)
        if isinstance(type_name, (list, tuple)):
            for candidate in type_name:
                if isinstance(candidate, str) and candidate in self._specs:
                    return self._specs[candidate]
        return None

    def type_names(self) -> List[str]:
        return list(self._specs.keys())

    def __contains__(self, type_name: object) -> bool:
        return isinstance(type_name, str) and type_name in self._specs

    def __len__(self) -> int:
        return len(self._specs)


DEFAULT_REGISTRY = SchemaRegistry.from_rules(BUILTIN_SCHEMA_RULES)


def lookup(type_name: Any) -> Optional[SchemaSpec]:
    return DEFAULT_REGISTRY.lookup(type_name)
