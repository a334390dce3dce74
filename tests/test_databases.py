import json

import pytest
from appwrite.enums.index_type import IndexType
from appwrite.enums.relation_mutate import RelationMutate
from appwrite.enums.relationship_type import RelationshipType
from appwrite.exception import AppwriteException

from appwrite_mcp.errors import AppwriteHTTPError
from appwrite_mcp.tools import databases


def _echo_document(database_id, collection_id, document_id, data, permissions=None):
    return {"$id": document_id, **data}


@pytest.mark.asyncio
async def test_create_document_generates_distinct_ids(appwrite, services):
    services["databases"].responses["create_document"] = _echo_document
    arguments = {"databaseId": "db", "collectionId": "posts", "data": {"title": "hi"}}

    first = await databases.create_document(appwrite, arguments)
    second = await databases.create_document(appwrite, arguments)

    assert first["$id"] and second["$id"]
    assert first["$id"] != second["$id"]


@pytest.mark.asyncio
async def test_create_document_uses_given_id(appwrite, services):
    await databases.create_document(appwrite, {
        "databaseId": "db", "collectionId": "posts", "documentId": "post-1",
        "data": {"title": "hi"}, "permissions": ['read("any")'],
    })

    assert services["databases"].calls_to("create_document") == [
        (("db", "posts", "post-1", {"title": "hi"}, ['read("any")']), {})
    ]


@pytest.mark.asyncio
async def test_delete_document_acknowledgement(appwrite):
    result = await databases.delete_document(appwrite, {"databaseId": "db", "collectionId": "c", "documentId": "d1"})
    assert result == {"success": True, "message": "Document d1 deleted"}


@pytest.mark.asyncio
async def test_create_index_converts_type(appwrite, services):
    await databases.create_index(appwrite, {
        "databaseId": "db", "collectionId": "c", "key": "by_title", "type": "unique", "attributes": ["title"],
    })

    (args, _), = services["databases"].calls_to("create_index")
    assert args == ("db", "c", "by_title", IndexType("unique"), ["title"], None)


@pytest.mark.asyncio
async def test_create_relationship_attribute_converts_enums(appwrite, services):
    await databases.create_relationship_attribute(appwrite, {
        "databaseId": "db", "collectionId": "authors", "relatedCollectionId": "books",
        "type": "oneToMany", "twoWay": True, "key": "books", "onDelete": "cascade",
    })

    (args, _), = services["databases"].calls_to("create_relationship_attribute")
    assert args == ("db", "authors", "books", RelationshipType("oneToMany"), True, "books", None, RelationMutate("cascade"))


@pytest.mark.asyncio
async def test_update_integer_attribute_passes_open_bounds(appwrite, services):
    await databases.update_integer_attribute(appwrite, {
        "databaseId": "db", "collectionId": "c", "key": "age", "required": False, "default": 0,
    })

    assert services["databases"].calls_to("update_integer_attribute") == [
        (("db", "c", "age", False, 0, None, None, None), {})
    ]


# Bulk operations

@pytest.mark.asyncio
async def test_create_documents_in_order(appwrite, services):
    services["databases"].responses["create_document"] = _echo_document
    items = [{"n": 1}, {"n": 2}, {"n": 3}]

    result = await databases.create_documents(appwrite, {"databaseId": "db", "collectionId": "c", "documents": items})

    assert result["success"] is True
    assert result["created"] == 3
    assert [document["n"] for document in result["documents"]] == [1, 2, 3]
    calls = services["databases"].calls_to("create_document")
    assert [args[3] for args, _ in calls] == items
    assert len({args[2] for args, _ in calls}) == 3


@pytest.mark.asyncio
async def test_create_documents_stops_at_first_failure(appwrite, services):
    def create(database_id, collection_id, document_id, data):
        if data["n"] == 2:
            raise AppwriteException("Invalid document structure", 400)
        return {"$id": document_id, **data}

    services["databases"].responses["create_document"] = create

    with pytest.raises(AppwriteException, match="Invalid document structure"):
        await databases.create_documents(appwrite, {
            "databaseId": "db", "collectionId": "c", "documents": [{"n": 1}, {"n": 2}, {"n": 3}],
        })

    # The first item stays created; the third is never attempted.
    assert len(services["databases"].calls_to("create_document")) == 2


@pytest.mark.asyncio
async def test_update_documents_applies_data_to_each_match(appwrite, services):
    services["databases"].responses["list_documents"] = {"total": 2, "documents": [{"$id": "a"}, {"$id": "b"}]}

    result = await databases.update_documents(appwrite, {
        "databaseId": "db", "collectionId": "c", "data": {"status": "done"}, "queries": ['equal("status", "open")'],
    })

    assert result == {"success": True, "updated": 2}
    assert services["databases"].calls_to("list_documents") == [(("db", "c", ['equal("status", "open")']), {})]
    assert services["databases"].calls_to("update_document") == [
        (("db", "c", "a", {"status": "done"}), {}),
        (("db", "c", "b", {"status": "done"}), {}),
    ]


@pytest.mark.asyncio
async def test_delete_documents_counts_matches(appwrite, services):
    services["databases"].responses["list_documents"] = {"total": 3, "documents": [{"$id": "x"}, {"$id": "y"}, {"$id": "z"}]}

    result = await databases.delete_documents(appwrite, {
        "databaseId": "db", "collectionId": "c", "queries": ['lessThan("age", 18)'],
    })

    assert result == {"success": True, "deleted": 3}
    assert [args[2] for args, _ in services["databases"].calls_to("delete_document")] == ["x", "y", "z"]


@pytest.mark.asyncio
async def test_delete_documents_requires_queries(dispatcher, services):
    result = await dispatcher.call_tool("delete_documents", {"databaseId": "db", "collectionId": "c"})

    assert result.isError
    assert "queries" in result.content[0].text
    assert services["databases"].calls == []


# Upsert

@pytest.mark.asyncio
async def test_upsert_updates_existing_document(appwrite, services):
    services["databases"].responses["get_document"] = {"$id": "d1", "title": "old"}
    services["databases"].responses["update_document"] = {"$id": "d1", "title": "new"}

    result = await databases.upsert_document(appwrite, {
        "databaseId": "db", "collectionId": "c", "documentId": "d1", "data": {"title": "new"},
    })

    assert result == {"$id": "d1", "title": "new"}
    assert services["databases"].calls_to("update_document") == [(("db", "c", "d1", {"title": "new"}, None), {})]
    assert services["databases"].calls_to("create_document") == []


@pytest.mark.asyncio
async def test_upsert_creates_when_get_fails(appwrite, services):
    services["databases"].responses["get_document"] = AppwriteException("Document not found", 404)

    await databases.upsert_document(appwrite, {
        "databaseId": "db", "collectionId": "c", "documentId": "d1",
        "data": {"title": "new"}, "permissions": ['read("any")'],
    })

    assert services["databases"].calls_to("create_document") == [
        (("db", "c", "d1", {"title": "new"}, ['read("any")']), {})
    ]
    assert services["databases"].calls_to("update_document") == []


@pytest.mark.asyncio
async def test_upsert_create_failure_propagates(appwrite, services):
    services["databases"].responses["get_document"] = AppwriteException("Document not found", 404)
    services["databases"].responses["create_document"] = AppwriteException("Collection not found", 404)

    with pytest.raises(AppwriteException, match="Collection not found"):
        await databases.upsert_document(appwrite, {
            "databaseId": "db", "collectionId": "c", "documentId": "d1", "data": {},
        })


# Increment

async def _increment(appwrite, services, document, **extra):
    services["databases"].responses["get_document"] = document
    await databases.increment_document_attribute(appwrite, {
        "databaseId": "db", "collectionId": "c", "documentId": "d1", "attribute": "count", **extra,
    })
    (args, _), = services["databases"].calls_to("update_document")
    return args[3]


@pytest.mark.asyncio
async def test_increment_missing_attribute_starts_from_zero(appwrite, services):
    assert await _increment(appwrite, services, {"$id": "d1"}, value=5) == {"count": 5}


@pytest.mark.asyncio
async def test_increment_by_negative_value(appwrite, services):
    assert await _increment(appwrite, services, {"$id": "d1", "count": 5}, value=-3) == {"count": 2}


@pytest.mark.asyncio
async def test_increment_defaults_to_one(appwrite, services):
    assert await _increment(appwrite, services, {"$id": "d1", "count": 41}) == {"count": 42}


@pytest.mark.asyncio
async def test_increment_by_zero_keeps_value(appwrite, services):
    assert await _increment(appwrite, services, {"$id": "d1", "count": 7}, value=0) == {"count": 7}


@pytest.mark.asyncio
async def test_increment_non_numeric_value_counts_as_zero(appwrite, services):
    assert await _increment(appwrite, services, {"$id": "d1", "count": "seven"}, value=2) == {"count": 2}
    services["databases"].calls.clear()
    assert await _increment(appwrite, services, {"$id": "d1", "count": True}) == {"count": 1}


# Geo attributes over raw HTTP

@pytest.mark.asyncio
async def test_create_point_attribute_posts_to_rest_path(http_appwrite, backend):
    backend.routes["/v1/databases/db/collections/places/attributes/point"] = (202, '{"key": "location", "type": "point"}')

    result = await databases.create_point_attribute(http_appwrite, {
        "databaseId": "db", "collectionId": "places", "key": "location", "required": True, "default": [1.5, 2.5],
    })

    assert result == {"key": "location", "type": "point"}
    request = backend.requests[0]
    assert json.loads(request["body"]) == {"key": "location", "required": True, "default": [1.5, 2.5]}
    assert request["headers"]["X-Appwrite-Project"] == "test-project"


@pytest.mark.asyncio
async def test_create_polygon_attribute_failure(http_appwrite, backend):
    backend.routes["/v1/databases/db/collections/places/attributes/polygon"] = (409, "Attribute already exists")

    with pytest.raises(AppwriteHTTPError) as exc_info:
        await databases.create_polygon_attribute(http_appwrite, {
            "databaseId": "db", "collectionId": "places", "key": "area", "required": False,
        })

    assert str(exc_info.value) == "Failed to create polygon attribute: Attribute already exists"


@pytest.mark.asyncio
async def test_geo_attribute_body_omits_unset_fields(http_appwrite, backend):
    await databases.create_polygon_attribute(http_appwrite, {
        "databaseId": "db", "collectionId": "places", "key": "area", "required": False, "array": False,
    })

    assert json.loads(backend.requests[0]["body"]) == {"key": "area", "required": False, "array": False}
