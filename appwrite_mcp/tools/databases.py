import logging

from appwrite.enums.index_type import IndexType
from appwrite.enums.relation_mutate import RelationMutate
from appwrite.enums.relationship_type import RelationshipType
from appwrite.id import ID

from ..appwrite_client import run_sync
from .common import (
    PERMISSIONS,
    QUERIES,
    SEARCH,
    boolean,
    deleted,
    enum,
    integer,
    number,
    obj,
    string,
    string_list,
)

logger = logging.getLogger(__name__)

name = "databases"
description = "Databases, collections, documents, attributes and indexes."

DATABASE_ID = string("Database ID")
COLLECTION_ID = string("Collection ID")
DOCUMENT_ID = string("Document ID")
ATTRIBUTE_KEY = string("Attribute key")
REQUIRED_FLAG = boolean("Is attribute required")
ARRAY_FLAG = boolean("Is array attribute")
NEW_KEY = string("New attribute key (rename)")
ON_DELETE = enum(["cascade", "restrict", "setNull"], "On delete behavior")


def _attribute_schema(extra=None, required=("databaseId", "collectionId", "key", "required")):
    properties = {
        "databaseId": DATABASE_ID,
        "collectionId": COLLECTION_ID,
        "key": ATTRIBUTE_KEY,
        "required": REQUIRED_FLAG,
    }
    properties.update(extra or {})
    return obj(properties, required)


def _update_attribute_schema(extra=None, required=("databaseId", "collectionId", "key", "required", "default")):
    return _attribute_schema({**(extra or {}), "newKey": NEW_KEY}, required)


tools = [
    # Database management
    {
        "name": "create_database",
        "description": "Create a new database",
        "parameters": obj(
            {
                "databaseId": string("Unique database ID. Use 'unique()' for auto-generation"),
                "name": string("Database name"),
                "enabled": boolean("Enable database (default: true)"),
            },
            ["name"],
        ),
    },
    {
        "name": "get_database",
        "description": "Get database by ID",
        "parameters": obj({"databaseId": DATABASE_ID}, ["databaseId"]),
    },
    {
        "name": "list_databases",
        "description": "List all databases",
        "parameters": obj({"queries": QUERIES, "search": SEARCH}),
    },
    {
        "name": "update_database",
        "description": "Update database by ID",
        "parameters": obj(
            {
                "databaseId": DATABASE_ID,
                "name": string("New database name"),
                "enabled": boolean("Enable or disable database"),
            },
            ["databaseId", "name"],
        ),
    },
    {
        "name": "delete_database",
        "description": "Delete database by ID",
        "parameters": obj({"databaseId": DATABASE_ID}, ["databaseId"]),
    },

    # Collection management
    {
        "name": "create_collection",
        "description": "Create a new collection in a database",
        "parameters": obj(
            {
                "databaseId": DATABASE_ID,
                "collectionId": string("Unique collection ID. Use 'unique()' for auto-generation"),
                "name": string("Collection name"),
                "permissions": PERMISSIONS,
                "documentSecurity": boolean("Enable document-level security"),
                "enabled": boolean("Enable collection"),
            },
            ["databaseId", "name"],
        ),
    },
    {
        "name": "get_collection",
        "description": "Get collection by ID",
        "parameters": obj({"databaseId": DATABASE_ID, "collectionId": COLLECTION_ID}, ["databaseId", "collectionId"]),
    },
    {
        "name": "list_collections",
        "description": "List all collections in a database",
        "parameters": obj({"databaseId": DATABASE_ID, "queries": QUERIES, "search": SEARCH}, ["databaseId"]),
    },
    {
        "name": "update_collection",
        "description": "Update collection by ID",
        "parameters": obj(
            {
                "databaseId": DATABASE_ID,
                "collectionId": COLLECTION_ID,
                "name": string("New collection name"),
                "permissions": PERMISSIONS,
                "documentSecurity": boolean("Enable document-level security"),
                "enabled": boolean("Enable collection"),
            },
            ["databaseId", "collectionId", "name"],
        ),
    },
    {
        "name": "delete_collection",
        "description": "Delete collection by ID",
        "parameters": obj({"databaseId": DATABASE_ID, "collectionId": COLLECTION_ID}, ["databaseId", "collectionId"]),
    },

    # Document management
    {
        "name": "create_document",
        "description": "Create a new document in a collection",
        "parameters": obj(
            {
                "databaseId": DATABASE_ID,
                "collectionId": COLLECTION_ID,
                "documentId": string("Unique document ID. Use 'unique()' for auto-generation"),
                "data": {"type": "object", "description": "Document data as JSON object"},
                "permissions": PERMISSIONS,
            },
            ["databaseId", "collectionId", "data"],
        ),
    },
    {
        "name": "get_document",
        "description": "Get document by ID",
        "parameters": obj(
            {
                "databaseId": DATABASE_ID,
                "collectionId": COLLECTION_ID,
                "documentId": DOCUMENT_ID,
                "queries": string_list("Query strings for selecting fields"),
            },
            ["databaseId", "collectionId", "documentId"],
        ),
    },
    {
        "name": "list_documents",
        "description": "List documents in a collection with optional filtering",
        "parameters": obj(
            {
                "databaseId": DATABASE_ID,
                "collectionId": COLLECTION_ID,
                "queries": string_list(
                    "Query strings for filtering (e.g., 'Query.equal(\"name\", \"John\")' or 'Query.limit(10)')"
                ),
            },
            ["databaseId", "collectionId"],
        ),
    },
    {
        "name": "update_document",
        "description": "Update document by ID",
        "parameters": obj(
            {
                "databaseId": DATABASE_ID,
                "collectionId": COLLECTION_ID,
                "documentId": DOCUMENT_ID,
                "data": {"type": "object", "description": "Document data to update as JSON object"},
                "permissions": PERMISSIONS,
            },
            ["databaseId", "collectionId", "documentId"],
        ),
    },
    {
        "name": "delete_document",
        "description": "Delete document by ID",
        "parameters": obj(
            {"databaseId": DATABASE_ID, "collectionId": COLLECTION_ID, "documentId": DOCUMENT_ID},
            ["databaseId", "collectionId", "documentId"],
        ),
    },

    # Attribute creation
    {
        "name": "create_string_attribute",
        "description": "Create a string attribute in a collection",
        "parameters": _attribute_schema(
            {
                "size": integer("Maximum string length"),
                "default": string("Default value"),
                "array": ARRAY_FLAG,
                "encrypt": boolean("Encrypt attribute value"),
            },
            ["databaseId", "collectionId", "key", "size", "required"],
        ),
    },
    {
        "name": "create_integer_attribute",
        "description": "Create an integer attribute in a collection",
        "parameters": _attribute_schema(
            {
                "min": integer("Minimum value"),
                "max": integer("Maximum value"),
                "default": integer("Default value"),
                "array": ARRAY_FLAG,
            }
        ),
    },
    {
        "name": "create_float_attribute",
        "description": "Create a float attribute in a collection",
        "parameters": _attribute_schema(
            {
                "min": number("Minimum value"),
                "max": number("Maximum value"),
                "default": number("Default value"),
                "array": ARRAY_FLAG,
            }
        ),
    },
    {
        "name": "create_boolean_attribute",
        "description": "Create a boolean attribute in a collection",
        "parameters": _attribute_schema({"default": boolean("Default value"), "array": ARRAY_FLAG}),
    },
    {
        "name": "create_email_attribute",
        "description": "Create an email attribute in a collection",
        "parameters": _attribute_schema({"default": string("Default value"), "array": ARRAY_FLAG}),
    },
    {
        "name": "create_enum_attribute",
        "description": "Create an enum attribute in a collection",
        "parameters": _attribute_schema(
            {
                "elements": string_list("Allowed enum values"),
                "default": string("Default value"),
                "array": ARRAY_FLAG,
            },
            ["databaseId", "collectionId", "key", "elements", "required"],
        ),
    },
    {
        "name": "create_datetime_attribute",
        "description": "Create a datetime attribute in a collection",
        "parameters": _attribute_schema({"default": string("Default value in ISO 8601 format"), "array": ARRAY_FLAG}),
    },
    {
        "name": "create_url_attribute",
        "description": "Create a URL attribute in a collection",
        "parameters": _attribute_schema({"default": string("Default value"), "array": ARRAY_FLAG}),
    },
    {
        "name": "create_ip_attribute",
        "description": "Create an IP address attribute in a collection",
        "parameters": _attribute_schema({"default": string("Default IP address value"), "array": ARRAY_FLAG}),
    },
    {
        "name": "create_point_attribute",
        "description": "Create a GeoJSON Point attribute for storing geographic coordinates [longitude, latitude]",
        "parameters": _attribute_schema(
            {
                "default": {"type": "array", "items": {"type": "number"}, "description": "Default value as [longitude, latitude]"},
                "array": ARRAY_FLAG,
            }
        ),
    },
    {
        "name": "create_polygon_attribute",
        "description": "Create a GeoJSON Polygon attribute for storing geographic boundaries",
        "parameters": _attribute_schema(
            {
                "default": {"type": "array", "description": "Default polygon coordinates as array of [longitude, latitude] arrays"},
                "array": ARRAY_FLAG,
            }
        ),
    },
    {
        "name": "create_relationship_attribute",
        "description": "Create a relationship attribute between two collections (1:1, 1:N, N:1, N:M)",
        "parameters": obj(
            {
                "databaseId": DATABASE_ID,
                "collectionId": string("Collection ID (parent)"),
                "relatedCollectionId": string("Related collection ID"),
                "type": enum(["oneToOne", "oneToMany", "manyToOne", "manyToMany"], "Relationship type"),
                "twoWay": boolean("Create two-way relationship"),
                "key": ATTRIBUTE_KEY,
                "twoWayKey": string("Two-way attribute key (for related collection)"),
                "onDelete": ON_DELETE,
            },
            ["databaseId", "collectionId", "relatedCollectionId", "type"],
        ),
    },

    # Attribute inspection
    {
        "name": "list_attributes",
        "description": "List all attributes in a collection",
        "parameters": obj(
            {"databaseId": DATABASE_ID, "collectionId": COLLECTION_ID, "queries": QUERIES},
            ["databaseId", "collectionId"],
        ),
    },
    {
        "name": "get_attribute",
        "description": "Get attribute by key",
        "parameters": obj(
            {"databaseId": DATABASE_ID, "collectionId": COLLECTION_ID, "key": ATTRIBUTE_KEY},
            ["databaseId", "collectionId", "key"],
        ),
    },
    {
        "name": "delete_attribute",
        "description": "Delete attribute by key",
        "parameters": obj(
            {"databaseId": DATABASE_ID, "collectionId": COLLECTION_ID, "key": ATTRIBUTE_KEY},
            ["databaseId", "collectionId", "key"],
        ),
    },

    # Attribute updates
    {
        "name": "update_string_attribute",
        "description": "Update a string attribute",
        "parameters": _update_attribute_schema({"default": string("Default value"), "size": integer("Maximum string length")}),
    },
    {
        "name": "update_integer_attribute",
        "description": "Update an integer attribute",
        "parameters": _update_attribute_schema(
            {"min": integer("Minimum value"), "max": integer("Maximum value"), "default": integer("Default value")}
        ),
    },
    {
        "name": "update_float_attribute",
        "description": "Update a float attribute",
        "parameters": _update_attribute_schema(
            {"min": number("Minimum value"), "max": number("Maximum value"), "default": number("Default value")}
        ),
    },
    {
        "name": "update_boolean_attribute",
        "description": "Update a boolean attribute",
        "parameters": _update_attribute_schema({"default": boolean("Default value")}),
    },
    {
        "name": "update_email_attribute",
        "description": "Update an email attribute",
        "parameters": _update_attribute_schema({"default": string("Default value")}),
    },
    {
        "name": "update_enum_attribute",
        "description": "Update an enum attribute",
        "parameters": _update_attribute_schema(
            {"elements": string_list("Allowed enum values"), "default": string("Default value")},
            ["databaseId", "collectionId", "key", "elements", "required", "default"],
        ),
    },
    {
        "name": "update_datetime_attribute",
        "description": "Update a datetime attribute",
        "parameters": _update_attribute_schema({"default": string("Default value in ISO 8601 format")}),
    },
    {
        "name": "update_url_attribute",
        "description": "Update a URL attribute",
        "parameters": _update_attribute_schema({"default": string("Default value")}),
    },
    {
        "name": "update_ip_attribute",
        "description": "Update an IP address attribute",
        "parameters": _update_attribute_schema({"default": string("Default value")}),
    },
    {
        "name": "update_relationship_attribute",
        "description": "Update a relationship attribute",
        "parameters": obj(
            {
                "databaseId": DATABASE_ID,
                "collectionId": COLLECTION_ID,
                "key": ATTRIBUTE_KEY,
                "onDelete": ON_DELETE,
                "newKey": NEW_KEY,
            },
            ["databaseId", "collectionId", "key"],
        ),
    },

    # Index management
    {
        "name": "create_index",
        "description": "Create an index in a collection",
        "parameters": obj(
            {
                "databaseId": DATABASE_ID,
                "collectionId": COLLECTION_ID,
                "key": string("Index key/name"),
                "type": enum(["key", "unique", "fulltext"], "Index type"),
                "attributes": string_list("Attribute keys to index"),
                "orders": string_list("Order direction for each attribute (asc/desc)"),
            },
            ["databaseId", "collectionId", "key", "type", "attributes"],
        ),
    },
    {
        "name": "list_indexes",
        "description": "List all indexes in a collection",
        "parameters": obj(
            {"databaseId": DATABASE_ID, "collectionId": COLLECTION_ID, "queries": QUERIES},
            ["databaseId", "collectionId"],
        ),
    },
    {
        "name": "get_index",
        "description": "Get index by key",
        "parameters": obj(
            {"databaseId": DATABASE_ID, "collectionId": COLLECTION_ID, "key": string("Index key")},
            ["databaseId", "collectionId", "key"],
        ),
    },
    {
        "name": "delete_index",
        "description": "Delete index by key",
        "parameters": obj(
            {"databaseId": DATABASE_ID, "collectionId": COLLECTION_ID, "key": string("Index key")},
            ["databaseId", "collectionId", "key"],
        ),
    },

    # Bulk and composite document operations
    {
        "name": "create_documents",
        "description": "Create multiple documents in a collection at once",
        "parameters": obj(
            {
                "databaseId": DATABASE_ID,
                "collectionId": COLLECTION_ID,
                "documents": {"type": "array", "items": {"type": "object"}, "description": "Array of document data objects"},
            },
            ["databaseId", "collectionId", "documents"],
        ),
    },
    {
        "name": "update_documents",
        "description": "Update multiple documents matching a query",
        "parameters": obj(
            {
                "databaseId": DATABASE_ID,
                "collectionId": COLLECTION_ID,
                "data": {"type": "object", "description": "Data to update in matching documents"},
                "queries": string_list("Query strings to filter documents to update"),
            },
            ["databaseId", "collectionId", "data"],
        ),
    },
    {
        "name": "delete_documents",
        "description": "Delete multiple documents matching a query",
        "parameters": obj(
            {
                "databaseId": DATABASE_ID,
                "collectionId": COLLECTION_ID,
                "queries": string_list("Query strings to filter documents to delete"),
            },
            ["databaseId", "collectionId", "queries"],
        ),
    },
    {
        "name": "upsert_document",
        "description": "Create or update a document (upsert)",
        "parameters": obj(
            {
                "databaseId": DATABASE_ID,
                "collectionId": COLLECTION_ID,
                "documentId": DOCUMENT_ID,
                "data": {"type": "object", "description": "Document data"},
                "permissions": {"type": "array", "items": {"type": "string"}, "description": "Permissions"},
            },
            ["databaseId", "collectionId", "documentId", "data"],
        ),
    },
    {
        "name": "increment_document_attribute",
        "description": (
            "Increment a numeric attribute value. Reads the document and writes the new value back "
            "in two calls, so concurrent increments on the same document can be lost."
        ),
        "parameters": obj(
            {
                "databaseId": DATABASE_ID,
                "collectionId": COLLECTION_ID,
                "documentId": DOCUMENT_ID,
                "attribute": string("Attribute key to increment"),
                "value": number("Value to increment by (can be negative, default: 1)"),
            },
            ["databaseId", "collectionId", "documentId", "attribute"],
        ),
    },
]


def _optional_enum(enum_cls, value):
    return enum_cls(value) if value is not None else None


# Database management

async def create_database(appwrite, arguments):
    database_id = arguments.get("databaseId") or ID.unique()
    return await run_sync(appwrite.databases.create, database_id, arguments["name"], arguments.get("enabled"))


async def get_database(appwrite, arguments):
    return await run_sync(appwrite.databases.get, arguments["databaseId"])


async def list_databases(appwrite, arguments):
    return await run_sync(appwrite.databases.list, arguments.get("queries"), arguments.get("search"))


async def update_database(appwrite, arguments):
    return await run_sync(
        appwrite.databases.update, arguments["databaseId"], arguments["name"], arguments.get("enabled")
    )


async def delete_database(appwrite, arguments):
    await run_sync(appwrite.databases.delete, arguments["databaseId"])
    return deleted("Database", arguments["databaseId"])


# Collection management

async def create_collection(appwrite, arguments):
    collection_id = arguments.get("collectionId") or ID.unique()
    return await run_sync(
        appwrite.databases.create_collection,
        arguments["databaseId"],
        collection_id,
        arguments["name"],
        arguments.get("permissions"),
        arguments.get("documentSecurity"),
        arguments.get("enabled"),
    )


async def get_collection(appwrite, arguments):
    return await run_sync(appwrite.databases.get_collection, arguments["databaseId"], arguments["collectionId"])


async def list_collections(appwrite, arguments):
    return await run_sync(
        appwrite.databases.list_collections,
        arguments["databaseId"],
        arguments.get("queries"),
        arguments.get("search"),
    )


async def update_collection(appwrite, arguments):
    return await run_sync(
        appwrite.databases.update_collection,
        arguments["databaseId"],
        arguments["collectionId"],
        arguments["name"],
        arguments.get("permissions"),
        arguments.get("documentSecurity"),
        arguments.get("enabled"),
    )


async def delete_collection(appwrite, arguments):
    await run_sync(appwrite.databases.delete_collection, arguments["databaseId"], arguments["collectionId"])
    return deleted("Collection", arguments["collectionId"])


# Document management

async def create_document(appwrite, arguments):
    document_id = arguments.get("documentId") or ID.unique()
    return await run_sync(
        appwrite.databases.create_document,
        arguments["databaseId"],
        arguments["collectionId"],
        document_id,
        arguments["data"],
        arguments.get("permissions"),
    )


async def get_document(appwrite, arguments):
    return await run_sync(
        appwrite.databases.get_document,
        arguments["databaseId"],
        arguments["collectionId"],
        arguments["documentId"],
        arguments.get("queries"),
    )


async def list_documents(appwrite, arguments):
    return await run_sync(
        appwrite.databases.list_documents,
        arguments["databaseId"],
        arguments["collectionId"],
        arguments.get("queries"),
    )


async def update_document(appwrite, arguments):
    return await run_sync(
        appwrite.databases.update_document,
        arguments["databaseId"],
        arguments["collectionId"],
        arguments["documentId"],
        arguments.get("data"),
        arguments.get("permissions"),
    )


async def delete_document(appwrite, arguments):
    await run_sync(
        appwrite.databases.delete_document,
        arguments["databaseId"],
        arguments["collectionId"],
        arguments["documentId"],
    )
    return deleted("Document", arguments["documentId"])


# Attribute creation

async def create_string_attribute(appwrite, arguments):
    return await run_sync(
        appwrite.databases.create_string_attribute,
        arguments["databaseId"],
        arguments["collectionId"],
        arguments["key"],
        arguments["size"],
        arguments["required"],
        arguments.get("default"),
        arguments.get("array"),
        arguments.get("encrypt"),
    )


async def create_integer_attribute(appwrite, arguments):
    return await run_sync(
        appwrite.databases.create_integer_attribute,
        arguments["databaseId"],
        arguments["collectionId"],
        arguments["key"],
        arguments["required"],
        arguments.get("min"),
        arguments.get("max"),
        arguments.get("default"),
        arguments.get("array"),
    )


async def create_float_attribute(appwrite, arguments):
    return await run_sync(
        appwrite.databases.create_float_attribute,
        arguments["databaseId"],
        arguments["collectionId"],
        arguments["key"],
        arguments["required"],
        arguments.get("min"),
        arguments.get("max"),
        arguments.get("default"),
        arguments.get("array"),
    )


def _simple_attribute_creator(method_name):
    """Creators whose SDK call is (database, collection, key, required, default, array)."""

    async def handler(appwrite, arguments):
        method = getattr(appwrite.databases, method_name)
        return await run_sync(
            method,
            arguments["databaseId"],
            arguments["collectionId"],
            arguments["key"],
            arguments["required"],
            arguments.get("default"),
            arguments.get("array"),
        )

    handler.__name__ = method_name
    return handler


create_boolean_attribute = _simple_attribute_creator("create_boolean_attribute")
create_email_attribute = _simple_attribute_creator("create_email_attribute")
create_datetime_attribute = _simple_attribute_creator("create_datetime_attribute")
create_url_attribute = _simple_attribute_creator("create_url_attribute")
create_ip_attribute = _simple_attribute_creator("create_ip_attribute")


async def create_enum_attribute(appwrite, arguments):
    return await run_sync(
        appwrite.databases.create_enum_attribute,
        arguments["databaseId"],
        arguments["collectionId"],
        arguments["key"],
        arguments["elements"],
        arguments["required"],
        arguments.get("default"),
        arguments.get("array"),
    )


async def _create_geo_attribute(appwrite, arguments, kind):
    # The SDK has no point/polygon attribute calls yet, so go through REST directly.
    path = f"/databases/{arguments['databaseId']}/collections/{arguments['collectionId']}/attributes/{kind}"
    payload = {"key": arguments["key"], "required": arguments["required"]}
    for field in ("default", "array"):
        if arguments.get(field) is not None:
            payload[field] = arguments[field]
    return await appwrite.post_json(path, payload, error_prefix=f"Failed to create {kind} attribute")


async def create_point_attribute(appwrite, arguments):
    return await _create_geo_attribute(appwrite, arguments, "point")


async def create_polygon_attribute(appwrite, arguments):
    return await _create_geo_attribute(appwrite, arguments, "polygon")


async def create_relationship_attribute(appwrite, arguments):
    return await run_sync(
        appwrite.databases.create_relationship_attribute,
        arguments["databaseId"],
        arguments["collectionId"],
        arguments["relatedCollectionId"],
        RelationshipType(arguments["type"]),
        arguments.get("twoWay"),
        arguments.get("key"),
        arguments.get("twoWayKey"),
        _optional_enum(RelationMutate, arguments.get("onDelete")),
    )


# Attribute inspection

async def list_attributes(appwrite, arguments):
    return await run_sync(
        appwrite.databases.list_attributes,
        arguments["databaseId"],
        arguments["collectionId"],
        arguments.get("queries"),
    )


async def get_attribute(appwrite, arguments):
    return await run_sync(
        appwrite.databases.get_attribute, arguments["databaseId"], arguments["collectionId"], arguments["key"]
    )


async def delete_attribute(appwrite, arguments):
    await run_sync(
        appwrite.databases.delete_attribute, arguments["databaseId"], arguments["collectionId"], arguments["key"]
    )
    return deleted("Attribute", arguments["key"])


# Attribute updates

async def update_string_attribute(appwrite, arguments):
    return await run_sync(
        appwrite.databases.update_string_attribute,
        arguments["databaseId"],
        arguments["collectionId"],
        arguments["key"],
        arguments["required"],
        arguments["default"],
        arguments.get("size"),
        arguments.get("newKey"),
    )


def _ranged_attribute_updater(method_name):
    """Updaters whose SDK call is (database, collection, key, required, default, min, max, new_key)."""

    async def handler(appwrite, arguments):
        method = getattr(appwrite.databases, method_name)
        return await run_sync(
            method,
            arguments["databaseId"],
            arguments["collectionId"],
            arguments["key"],
            arguments["required"],
            arguments["default"],
            arguments.get("min"),
            arguments.get("max"),
            arguments.get("newKey"),
        )

    handler.__name__ = method_name
    return handler


def _simple_attribute_updater(method_name):
    """Updaters whose SDK call is (database, collection, key, required, default, new_key)."""

    async def handler(appwrite, arguments):
        method = getattr(appwrite.databases, method_name)
        return await run_sync(
            method,
            arguments["databaseId"],
            arguments["collectionId"],
            arguments["key"],
            arguments["required"],
            arguments["default"],
            arguments.get("newKey"),
        )

    handler.__name__ = method_name
    return handler


update_integer_attribute = _ranged_attribute_updater("update_integer_attribute")
update_float_attribute = _ranged_attribute_updater("update_float_attribute")
update_boolean_attribute = _simple_attribute_updater("update_boolean_attribute")
update_email_attribute = _simple_attribute_updater("update_email_attribute")
update_datetime_attribute = _simple_attribute_updater("update_datetime_attribute")
update_url_attribute = _simple_attribute_updater("update_url_attribute")
update_ip_attribute = _simple_attribute_updater("update_ip_attribute")


async def update_enum_attribute(appwrite, arguments):
    return await run_sync(
        appwrite.databases.update_enum_attribute,
        arguments["databaseId"],
        arguments["collectionId"],
        arguments["key"],
        arguments["elements"],
        arguments["required"],
        arguments["default"],
        arguments.get("newKey"),
    )


async def update_relationship_attribute(appwrite, arguments):
    return await run_sync(
        appwrite.databases.update_relationship_attribute,
        arguments["databaseId"],
        arguments["collectionId"],
        arguments["key"],
        _optional_enum(RelationMutate, arguments.get("onDelete")),
        arguments.get("newKey"),
    )


# Index management

async def create_index(appwrite, arguments):
    return await run_sync(
        appwrite.databases.create_index,
        arguments["databaseId"],
        arguments["collectionId"],
        arguments["key"],
        IndexType(arguments["type"]),
        arguments["attributes"],
        arguments.get("orders"),
    )


async def list_indexes(appwrite, arguments):
    return await run_sync(
        appwrite.databases.list_indexes,
        arguments["databaseId"],
        arguments["collectionId"],
        arguments.get("queries"),
    )


async def get_index(appwrite, arguments):
    return await run_sync(
        appwrite.databases.get_index, arguments["databaseId"], arguments["collectionId"], arguments["key"]
    )


async def delete_index(appwrite, arguments):
    await run_sync(
        appwrite.databases.delete_index, arguments["databaseId"], arguments["collectionId"], arguments["key"]
    )
    return deleted("Index", arguments["key"])


# Bulk and composite document operations

async def create_documents(appwrite, arguments):
    """
    Create each document in order, one call per item, with a fresh ID.

    A failure aborts the batch and propagates; documents created before it stay created.
    """
    database_id = arguments["databaseId"]
    collection_id = arguments["collectionId"]

    results = []
    for data in arguments["documents"]:
        result = await run_sync(appwrite.databases.create_document, database_id, collection_id, ID.unique(), data)
        results.append(result)
    return {"success": True, "created": len(results), "documents": results}


async def update_documents(appwrite, arguments):
    """Apply ``data`` to every document on the first page of matches for ``queries``."""
    database_id = arguments["databaseId"]
    collection_id = arguments["collectionId"]

    matches = await run_sync(appwrite.databases.list_documents, database_id, collection_id, arguments.get("queries"))
    updated = 0
    for document in matches["documents"]:
        await run_sync(
            appwrite.databases.update_document, database_id, collection_id, document["$id"], arguments["data"]
        )
        updated += 1
    return {"success": True, "updated": updated}


async def delete_documents(appwrite, arguments):
    """Delete every document on the first page of matches for the (required) ``queries``."""
    database_id = arguments["databaseId"]
    collection_id = arguments["collectionId"]

    matches = await run_sync(appwrite.databases.list_documents, database_id, collection_id, arguments["queries"])
    documents = matches["documents"]
    for document in documents:
        await run_sync(appwrite.databases.delete_document, database_id, collection_id, document["$id"])
    return {"success": True, "deleted": len(documents)}


async def upsert_document(appwrite, arguments):
    """
    Update the document if a get succeeds, otherwise create it with the given ID.

    Any failure of the get is treated as "not found".
    """
    database_id = arguments["databaseId"]
    collection_id = arguments["collectionId"]
    document_id = arguments["documentId"]

    try:
        await run_sync(appwrite.databases.get_document, database_id, collection_id, document_id)
    except Exception as e:
        logger.debug(f"upsert_document: get of {document_id} failed ({e}), creating it")
        return await run_sync(
            appwrite.databases.create_document,
            database_id,
            collection_id,
            document_id,
            arguments["data"],
            arguments.get("permissions"),
        )

    return await run_sync(
        appwrite.databases.update_document,
        database_id,
        collection_id,
        document_id,
        arguments["data"],
        arguments.get("permissions"),
    )


def _numeric(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


async def increment_document_attribute(appwrite, arguments):
    # Read-then-write: no concurrency check between the get and the update.
    database_id = arguments["databaseId"]
    collection_id = arguments["collectionId"]
    document_id = arguments["documentId"]
    attribute = arguments["attribute"]

    document = await run_sync(appwrite.databases.get_document, database_id, collection_id, document_id)
    current = _numeric(document.get(attribute))
    delta = arguments.get("value")
    if delta is None:
        delta = 1

    return await run_sync(
        appwrite.databases.update_document,
        database_id,
        collection_id,
        document_id,
        {attribute: current + delta},
    )


handlers = {
    "create_database": create_database,
    "get_database": get_database,
    "list_databases": list_databases,
    "update_database": update_database,
    "delete_database": delete_database,
    "create_collection": create_collection,
    "get_collection": get_collection,
    "list_collections": list_collections,
    "update_collection": update_collection,
    "delete_collection": delete_collection,
    "create_document": create_document,
    "get_document": get_document,
    "list_documents": list_documents,
    "update_document": update_document,
    "delete_document": delete_document,
    "create_string_attribute": create_string_attribute,
    "create_integer_attribute": create_integer_attribute,
    "create_float_attribute": create_float_attribute,
    "create_boolean_attribute": create_boolean_attribute,
    "create_email_attribute": create_email_attribute,
    "create_enum_attribute": create_enum_attribute,
    "create_datetime_attribute": create_datetime_attribute,
    "create_url_attribute": create_url_attribute,
    "create_ip_attribute": create_ip_attribute,
    "create_point_attribute": create_point_attribute,
    "create_polygon_attribute": create_polygon_attribute,
    "create_relationship_attribute": create_relationship_attribute,
    "list_attributes": list_attributes,
    "get_attribute": get_attribute,
    "delete_attribute": delete_attribute,
    "update_string_attribute": update_string_attribute,
    "update_integer_attribute": update_integer_attribute,
    "update_float_attribute": update_float_attribute,
    "update_boolean_attribute": update_boolean_attribute,
    "update_email_attribute": update_email_attribute,
    "update_enum_attribute": update_enum_attribute,
    "update_datetime_attribute": update_datetime_attribute,
    "update_url_attribute": update_url_attribute,
    "update_ip_attribute": update_ip_attribute,
    "update_relationship_attribute": update_relationship_attribute,
    "create_index": create_index,
    "list_indexes": list_indexes,
    "get_index": get_index,
    "delete_index": delete_index,
    "create_documents": create_documents,
    "update_documents": update_documents,
    "delete_documents": delete_documents,
    "upsert_document": upsert_document,
    "increment_document_attribute": increment_document_attribute,
}
