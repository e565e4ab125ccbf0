"""Shared test fixtures and configuration."""

import os

import pytest

from blog_search.domain.model import Document


# Drop any local overrides so tests always see the default settings
for key in [name for name in os.environ if name.upper().startswith("BLOG_SEARCH_")]:
    del os.environ[key]


SAMPLE_POSTS = [
    {
        "slug": "javascript-basics",
        "frontmatter": {
            "title": "JavaScript Basics for Beginners",
            "date": "2024-02-10",
            "excerpt": "Learn the fundamentals of JavaScript programming",
            "tags": ["javascript", "programming", "tutorial"],
        },
        "content": (
            "JavaScript is a versatile programming language used for web development. "
            "Variables, functions, and objects are core concepts."
        ),
    },
    {
        "slug": "typescript-guide",
        "frontmatter": {
            "title": "TypeScript Complete Guide",
            "date": "2024-02-09",
            "excerpt": "A comprehensive guide to TypeScript and type safety",
            "tags": ["typescript", "javascript", "programming"],
        },
        "content": (
            "TypeScript extends JavaScript with static typing. "
            "Interfaces, types, and generics help catch errors early."
        ),
    },
    {
        "slug": "react-hooks",
        "frontmatter": {
            "title": "React Hooks Tutorial",
            "date": "2024-02-08",
            "excerpt": "Master React Hooks for modern component development",
            "tags": ["react", "javascript", "hooks"],
        },
        "content": (
            "React Hooks like useState and useEffect enable functional components "
            "with state and lifecycle features."
        ),
    },
    {
        "slug": "nextjs-routing",
        "frontmatter": {
            "title": "Next.js Routing Explained",
            "date": "2024-02-07",
            "excerpt": "Understanding file-based routing in Next.js applications",
            "tags": ["nextjs", "react", "routing"],
        },
        "content": (
            "Next.js uses file-based routing with dynamic routes and catch-all segments "
            "for flexible navigation."
        ),
    },
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep BLOG_SEARCH_* variables from leaking between tests."""
    for key in list(os.environ):
        if key.upper().startswith("BLOG_SEARCH_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def sample_documents() -> list[Document]:
    """The four-post sample blog corpus."""
    return [Document.from_post(post) for post in SAMPLE_POSTS]


@pytest.fixture
def make_document():
    """Factory for documents with empty defaults."""

    def _make(doc_id: str, **fields) -> Document:
        return Document(id=doc_id, **fields)

    return _make
