from urllib.parse import quote

from appwrite.enums.compression import Compression
from appwrite.id import ID
from appwrite.input_file import InputFile

from ..appwrite_client import run_sync
from ..utils.encoding import decode_base64
from .common import PERMISSIONS, QUERIES, SEARCH, boolean, deleted, enum, integer, obj, string, string_list

name = "storage"
description = "Storage buckets and files."

BUCKET_ID = string("Bucket ID")
FILE_ID = string("File ID")


def _bucket_properties(bucket_id):
    return {
        "bucketId": bucket_id,
        "name": string("Bucket name"),
        "permissions": PERMISSIONS,
        "fileSecurity": boolean("Enable file-level security"),
        "enabled": boolean("Enable bucket"),
        "maximumFileSize": integer("Maximum file size in bytes"),
        "allowedFileExtensions": string_list("Allowed file extensions"),
        "compression": enum(["none", "gzip", "zstd"], "Compression algorithm"),
        "encryption": boolean("Enable encryption"),
        "antivirus": boolean("Enable antivirus scanning"),
    }


tools = [
    # Buckets
    {
        "name": "create_bucket",
        "description": "Create a new storage bucket",
        "parameters": obj(
            _bucket_properties(string("Unique bucket ID. Use 'unique()' for auto-generation")),
            ["name"],
        ),
    },
    {
        "name": "get_bucket",
        "description": "Get bucket by ID",
        "parameters": obj({"bucketId": BUCKET_ID}, ["bucketId"]),
    },
    {
        "name": "list_buckets",
        "description": "List all storage buckets",
        "parameters": obj({"queries": QUERIES, "search": SEARCH}),
    },
    {
        "name": "update_bucket",
        "description": "Update bucket by ID",
        "parameters": obj(_bucket_properties(BUCKET_ID), ["bucketId", "name"]),
    },
    {
        "name": "delete_bucket",
        "description": "Delete bucket by ID",
        "parameters": obj({"bucketId": BUCKET_ID}, ["bucketId"]),
    },

    # Files
    {
        "name": "get_file",
        "description": "Get file metadata by ID",
        "parameters": obj({"bucketId": BUCKET_ID, "fileId": FILE_ID}, ["bucketId", "fileId"]),
    },
    {
        "name": "list_files",
        "description": "List all files in a bucket",
        "parameters": obj({"bucketId": BUCKET_ID, "queries": QUERIES, "search": SEARCH}, ["bucketId"]),
    },
    {
        "name": "update_file",
        "description": "Update file metadata (name and permissions)",
        "parameters": obj(
            {
                "bucketId": BUCKET_ID,
                "fileId": FILE_ID,
                "name": string("New file name"),
                "permissions": PERMISSIONS,
            },
            ["bucketId", "fileId"],
        ),
    },
    {
        "name": "delete_file",
        "description": "Delete file by ID",
        "parameters": obj({"bucketId": BUCKET_ID, "fileId": FILE_ID}, ["bucketId", "fileId"]),
    },
    {
        "name": "get_file_url",
        "description": "Get file URL (download or view)",
        "parameters": obj(
            {
                "bucketId": BUCKET_ID,
                "fileId": FILE_ID,
                "type": enum(["download", "view"], "URL type: 'download' or 'view' (default: download)"),
            },
            ["bucketId", "fileId"],
        ),
    },
    {
        "name": "create_file",
        "description": "Upload a file to a bucket (provide base64 encoded content)",
        "parameters": obj(
            {
                "bucketId": BUCKET_ID,
                "fileId": string("Unique file ID"),
                "fileName": string("File name with extension"),
                "fileContent": string("Base64 encoded file content"),
                "permissions": string_list("File permissions"),
            },
            ["bucketId", "fileName", "fileContent"],
        ),
    },
]


def _bucket_args(arguments, bucket_id):
    compression = arguments.get("compression")
    return (
        bucket_id,
        arguments["name"],
        arguments.get("permissions"),
        arguments.get("fileSecurity"),
        arguments.get("enabled"),
        arguments.get("maximumFileSize"),
        arguments.get("allowedFileExtensions"),
        Compression(compression) if compression is not None else None,
        arguments.get("encryption"),
        arguments.get("antivirus"),
    )


async def create_bucket(appwrite, arguments):
    bucket_id = arguments.get("bucketId") or ID.unique()
    return await run_sync(appwrite.storage.create_bucket, *_bucket_args(arguments, bucket_id))


async def get_bucket(appwrite, arguments):
    return await run_sync(appwrite.storage.get_bucket, arguments["bucketId"])


async def list_buckets(appwrite, arguments):
    return await run_sync(appwrite.storage.list_buckets, arguments.get("queries"), arguments.get("search"))


async def update_bucket(appwrite, arguments):
    return await run_sync(appwrite.storage.update_bucket, *_bucket_args(arguments, arguments["bucketId"]))


async def delete_bucket(appwrite, arguments):
    await run_sync(appwrite.storage.delete_bucket, arguments["bucketId"])
    return deleted("Bucket", arguments["bucketId"])


async def get_file(appwrite, arguments):
    return await run_sync(appwrite.storage.get_file, arguments["bucketId"], arguments["fileId"])


async def list_files(appwrite, arguments):
    return await run_sync(
        appwrite.storage.list_files, arguments["bucketId"], arguments.get("queries"), arguments.get("search")
    )


async def update_file(appwrite, arguments):
    return await run_sync(
        appwrite.storage.update_file,
        arguments["bucketId"],
        arguments["fileId"],
        arguments.get("name"),
        arguments.get("permissions"),
    )


async def delete_file(appwrite, arguments):
    await run_sync(appwrite.storage.delete_file, arguments["bucketId"], arguments["fileId"])
    return deleted("File", arguments["fileId"])


async def get_file_url(appwrite, arguments):
    """
    Build the view or download URL for a file.

    No request is made; the SDK's view/download calls fetch the file body,
    which is not what a caller asking for a URL wants.
    """
    url_type = "view" if arguments.get("type") == "view" else "download"
    config = appwrite.config
    url = (
        f"{config.endpoint}/storage/buckets/{quote(arguments['bucketId'], safe='')}"
        f"/files/{quote(arguments['fileId'], safe='')}/{url_type}?project={quote(config.project_id, safe='')}"
    )
    return {"url": url, "type": url_type}


async def create_file(appwrite, arguments):
    content = decode_base64(arguments["fileContent"], "create_file", "fileContent")
    file_id = arguments.get("fileId") or ID.unique()
    upload = InputFile.from_bytes(content, arguments["fileName"])
    return await run_sync(
        appwrite.storage.create_file, arguments["bucketId"], file_id, upload, arguments.get("permissions")
    )


handlers = {
    "create_bucket": create_bucket,
    "get_bucket": get_bucket,
    "list_buckets": list_buckets,
    "update_bucket": update_bucket,
    "delete_bucket": delete_bucket,
    "get_file": get_file,
    "list_files": list_files,
    "update_file": update_file,
    "delete_file": delete_file,
    "get_file_url": get_file_url,
    "create_file": create_file,
}
