import copy
from datetime import datetime, timezone

import pytest

from seo_schema.core.diagnostics import Diagnostic
from seo_schema.core.placeholders import (
    PLACEHOLDER_IMAGE_URL,
    PLACEHOLDER_TEXT,
    format_inline,
    placeholder_for,
)
from seo_schema.core.registry import lookup
from seo_schema.core.schema_repair import (
    attempt_to_fix_schema,
    parse_date,
    suggest_fix,
    suggest_fixes,
)
from seo_schema.core.schema_validator import validate_schema

FIXED_NOW = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


def test_no_change_returns_none(minimal_article):
    result = validate_schema(minimal_article)
    assert attempt_to_fix_schema(minimal_article, result.diagnostics) is None


def test_missing_context_is_added(minimal_article):
    del minimal_article["@context"]
    diagnostics = validate_schema(minimal_article).diagnostics
    fixed = attempt_to_fix_schema(minimal_article, diagnostics)
    assert fixed["@context"] == "https://schema.org"
    assert "@context" not in minimal_article


def test_wrong_context_is_left_for_review(minimal_article):
    minimal_article["@context"] = "https://example.org"
    diagnostics = validate_schema(minimal_article).diagnostics
    assert attempt_to_fix_schema(minimal_article, diagnostics) is None


def test_primitive_repairs_make_document_valid():
    doc = {
        "@context": "https://schema.org",
        "@type": "Event",
        "location": {"@type": "Place", "name": "Hall"},
    }
    diagnostics = validate_schema(doc).diagnostics
    fixed = attempt_to_fix_schema(doc, diagnostics, now=FIXED_NOW)
    assert fixed["name"] == PLACEHOLDER_TEXT
    assert fixed["startDate"] == "2024-05-01T12:30:00.000Z"
    assert validate_schema(fixed).is_valid is True


def test_repair_is_idempotent():
    doc = {"@type": "Event", "location": {"@type": "Place", "name": "Hall"}}
    fixed = attempt_to_fix_schema(doc, validate_schema(doc).diagnostics, now=FIXED_NOW)
    assert attempt_to_fix_schema(fixed, validate_schema(fixed).diagnostics, now=FIXED_NOW) is None


def test_missing_context_and_properties_repaired_in_one_pass():
    doc = {"@type": "Product"}
    fixed = attempt_to_fix_schema(doc, validate_schema(doc).diagnostics)
    assert validate_schema(fixed).is_valid is True
    assert doc == {"@type": "Product"}


def test_canned_objects_for_article():
    doc = {"@context": "https://schema.org", "@type": "Article", "headline": "H", "datePublished": "2024-01-01T00:00:00Z"}
    fixed = attempt_to_fix_schema(doc, validate_schema(doc).diagnostics)
    assert fixed["author"] == {"@type": "Person", "name": "Author Name"}
    assert fixed["publisher"]["logo"] == {"@type": "ImageObject", "url": "https://example.com/logo.png"}
    assert validate_schema(fixed).is_valid is True


def test_canned_arrays_are_valid_nested_structures():
    faq = {"@context": "https://schema.org", "@type": "FAQPage"}
    crumbs = {"@context": "https://schema.org", "@type": "BreadcrumbList"}
    for doc in (faq, crumbs):
        fixed = attempt_to_fix_schema(doc, validate_schema(doc).diagnostics)
        assert validate_schema(fixed).is_valid is True


def test_placeholder_values_are_fresh_copies():
    doc = {"@context": "https://schema.org", "@type": "Event", "name": "E", "startDate": "2024-01-01T00:00:00Z"}
    first = attempt_to_fix_schema(doc, validate_schema(doc).diagnostics)
    first["location"]["address"]["addressLocality"] = "Changed"
    second = attempt_to_fix_schema(doc, validate_schema(doc).diagnostics)
    assert second["location"]["address"]["addressLocality"] == "City"


def test_present_property_is_not_overwritten(minimal_article):
    diagnostics = [Diagnostic(path="headline", message="Missing required property: headline", severity="error")]
    assert attempt_to_fix_schema(minimal_article, diagnostics) is None


def test_date_only_value_is_normalised(minimal_article):
    minimal_article["datePublished"] = "2024-01-01"
    fixed = attempt_to_fix_schema(minimal_article, validate_schema(minimal_article).diagnostics)
    assert fixed["datePublished"] == "2024-01-01T00:00:00.000Z"
    assert minimal_article["datePublished"] == "2024-01-01"


def test_unparseable_date_is_left_untouched(minimal_article):
    minimal_article["datePublished"] = "sometime soon"
    assert attempt_to_fix_schema(minimal_article, validate_schema(minimal_article).diagnostics) is None


@pytest.mark.parametrize(
    "value",
    [
        "9999-12-31 23:00:00-05:00",
        "0001-01-01 00:30:00+01:00",
        "Fri, 31 Dec 9999 23:00:00 -0500",
    ],
)
def test_date_outside_utc_range_is_left_untouched(minimal_article, value):
    minimal_article["datePublished"] = value
    diagnostics = validate_schema(minimal_article).diagnostics
    assert any(d.path == "datePublished" for d in diagnostics)
    assert attempt_to_fix_schema(minimal_article, diagnostics) is None
    assert parse_date(value) is None


def test_boolean_image_replaced(minimal_article):
    minimal_article["image"] = True
    fixed = attempt_to_fix_schema(minimal_article, validate_schema(minimal_article).diagnostics)
    assert fixed["image"] == PLACEHOLDER_IMAGE_URL


def test_graph_items_repaired_without_mutating_input(minimal_article):
    broken = {"@context": "https://schema.org", "@type": "Product"}
    doc = {"@context": "https://schema.org", "@type": "WebPage", "@graph": [minimal_article, broken]}
    snapshot = copy.deepcopy(doc)
    fixed = attempt_to_fix_schema(doc, validate_schema(doc).diagnostics)
    assert fixed["@graph"][1]["name"] == PLACEHOLDER_TEXT
    assert fixed["@graph"][0] is minimal_article
    assert doc == snapshot
    assert validate_schema(fixed).is_valid is True


def test_accepts_plain_dict_diagnostics():
    doc = {"@type": "Product", "name": "P"}
    fixed = attempt_to_fix_schema(doc, [{"path": "@context", "message": "Missing @context property"}])
    assert fixed["@context"] == "https://schema.org"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2024-03-05T10:00:00+02:00", datetime(2024, 3, 5, 8, 0, tzinfo=timezone.utc)),
        ("Tue, 05 Mar 2024 10:00:00 GMT", datetime(2024, 3, 5, 10, 0, tzinfo=timezone.utc)),
        ("March 5, 2024", datetime(2024, 3, 5, tzinfo=timezone.utc)),
        ("2024/03/05", datetime(2024, 3, 5, tzinfo=timezone.utc)),
    ],
)
def test_parse_date_formats(text, expected):
    assert parse_date(text) == expected


def test_parse_date_rejects_garbage():
    assert parse_date("not-a-date") is None
    assert parse_date("") is None


def test_suggest_context():
    diagnostic = Diagnostic(path="@context", message="Missing @context property")
    assert suggest_fix({}, diagnostic) == 'Add "@context": "https://schema.org"'


def test_suggest_author_object():
    doc = {"@type": "Article"}
    diagnostic = Diagnostic(path="author", message="Missing required property: author", severity="error")
    assert suggest_fix(doc, diagnostic) == 'Add "author": { "@type": "Person", "name": "Author Name" }'


def test_suggest_date_time_hint():
    doc = {"@type": "Event"}
    diagnostic = Diagnostic(path="startDate", message="Missing required property: startDate", severity="error")
    assert suggest_fix(doc, diagnostic) == 'Add "startDate": "YYYY-MM-DDThh:mm:ss+00:00" (ISO format)'


def test_suggest_breadcrumb_skeleton():
    doc = {"@type": "BreadcrumbList"}
    diagnostic = Diagnostic(path="itemListElement", message="Missing required property: itemListElement")
    assert suggest_fix(doc, diagnostic) == (
        'Add "itemListElement": [{ "@type": "ListItem", "position": 1, "name": "Home", "item": "https://example.com" }]'
    )


def test_suggest_invalid_type(minimal_article):
    minimal_article["datePublished"] = "yesterday"
    [issue] = [d for d in validate_schema(minimal_article).diagnostics if d.path == "datePublished"]
    assert suggest_fix(minimal_article, issue) == "Fix type for datePublished to match string:date-time"


def test_suggest_nested_type():
    doc = {"@context": "https://schema.org", "@type": "FAQPage", "mainEntity": [{"@type": "Thing", "name": "Q", "acceptedAnswer": {"@type": "Answer", "text": "A"}}]}
    [issue] = validate_schema(doc).diagnostics
    assert suggest_fix(doc, issue) == 'Set "@type": "Question"'


def test_suggest_unknown_type_property_returns_none():
    doc = {"@type": "Recipe"}
    diagnostic = Diagnostic(path="name", message="Missing required property: name")
    assert suggest_fix(doc, diagnostic) is None


def test_suggestions_and_repairs_share_placeholders():
    spec = lookup("Article")
    placeholder = placeholder_for("publisher", spec.expected_type_for("publisher"))
    fixed = attempt_to_fix_schema(
        {"@type": "Article"},
        [Diagnostic(path="publisher", message="Missing required property: publisher")],
    )
    assert fixed["publisher"] == placeholder.value
    assert suggest_fix({"@type": "Article"}, Diagnostic(path="publisher", message="Missing required property: publisher")) == (
        f'Add "publisher": {format_inline(placeholder.value)}'
    )


def test_suggest_fixes_preserves_order(minimal_article):
    del minimal_article["@context"]
    diagnostics = validate_schema(minimal_article).diagnostics
    suggestions = suggest_fixes(minimal_article, diagnostics)
    assert len(suggestions) == len(diagnostics)
    assert suggestions[0] == 'Add "@context": "https://schema.org"'
    assert suggestions[1] is None


def test_format_inline_empty_containers():
    assert format_inline({}) == "{ }"
    assert format_inline([]) == "[]"
