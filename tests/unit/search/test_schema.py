"""Unit tests for the field weight table."""

import pytest

from blog_search.search.schema import DEFAULT_SCHEMA, SearchField, SearchSchema


@pytest.mark.unit
def test_default_schema_weights():
    assert DEFAULT_SCHEMA.to_dict() == {"title": 0.5, "excerpt": 0.3, "body": 0.2, "tags": 0.1}
    assert DEFAULT_SCHEMA.names == ("title", "excerpt", "body", "tags")
    assert DEFAULT_SCHEMA.get("tags").analyzer_name == "keyword"
    assert DEFAULT_SCHEMA.get("title").analyzer_name is None


@pytest.mark.unit
def test_fields_by_weight_breaks_ties_by_declaration_order():
    schema = SearchSchema.from_weights({"tags": 0.3, "body": 0.3, "title": 0.9, "excerpt": 0.1})

    assert [f.name for f in schema.fields_by_weight()] == ["title", "tags", "body", "excerpt"]


@pytest.mark.unit
@pytest.mark.parametrize("weight", [-0.1, 1.5])
def test_weight_out_of_range_rejected(weight):
    with pytest.raises(ValueError, match="within \\[0, 1\\]"):
        SearchField(name="title", weight=weight)


@pytest.mark.unit
def test_unknown_field_rejected():
    with pytest.raises(ValueError, match="Unknown search field"):
        SearchSchema.from_weights({"author": 0.2})


@pytest.mark.unit
def test_duplicate_field_rejected():
    with pytest.raises(ValueError, match="Duplicate field names"):
        SearchSchema(fields=(SearchField("title", 0.5), SearchField("title", 0.2)))


@pytest.mark.unit
def test_schema_get_missing_field():
    schema = SearchSchema.from_weights({"title": 1.0})

    assert schema.get("body") is None
    assert len(schema) == 1
