"""
Pytest configuration and shared JSON-LD fixtures.
"""
import copy
import os

import pytest

# Ensure tests never read the developer's local .env
os.environ.setdefault("PYTEST_DISABLE_DOTENV", "1")


MINIMAL_ARTICLE = {
    "@context": "https://schema.org",
    "@type": "Article",
    "headline": "H",
    "author": {"@type": "Person", "name": "A"},
    "datePublished": "2024-01-01T00:00:00Z",
    "publisher": {"@type": "Organization", "name": "P"},
}

VALID_FAQ = {
    "@context": "https://schema.org",
    "@type": "FAQPage",
    "mainEntity": [
        {
            "@type": "Question",
            "name": "What is JSON-LD?",
            "acceptedAnswer": {"@type": "Answer", "text": "A linked-data JSON format."},
        }
    ],
}

VALID_BREADCRUMB = {
    "@context": "https://schema.org",
    "@type": "BreadcrumbList",
    "itemListElement": [
        {"@type": "ListItem", "position": 1, "name": "Home", "item": "https://example.com"},
        {"@type": "ListItem", "position": 2, "item": {"@id": "https://example.com/blog", "name": "Blog"}},
    ],
}


@pytest.fixture
def minimal_article():
    return copy.deepcopy(MINIMAL_ARTICLE)


@pytest.fixture
def valid_faq():
    return copy.deepcopy(VALID_FAQ)


@pytest.fixture
def valid_breadcrumb():
    return copy.deepcopy(VALID_BREADCRUMB)
