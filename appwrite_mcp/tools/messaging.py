from appwrite.enums.smtp_encryption import SmtpEncryption
from appwrite.id import ID

from ..appwrite_client import run_sync
from .common import boolean, deleted, enum, integer, obj, string, string_list

name = "messaging"
description = "Messaging topics, subscribers, messages and providers."

TOPIC_ID = string("Topic ID")
MESSAGE_ID = string("Message ID")
PROVIDER_ID = string("Provider ID")
QUERY_FILTERS = string_list("Query filters")
SEARCH = string("Search term")
SCHEDULED_AT = string("Schedule time (ISO 8601)")
DRAFT = boolean("Save as draft")

tools = [
    # Topics
    {
        "name": "create_topic",
        "description": "Create a messaging topic for grouping subscribers",
        "parameters": obj(
            {
                "topicId": string("Unique topic ID"),
                "name": string("Topic name"),
                "subscribe": string_list("Roles that can subscribe"),
            },
            ["name"],
        ),
    },
    {
        "name": "get_topic",
        "description": "Get topic by ID",
        "parameters": obj({"topicId": TOPIC_ID}, ["topicId"]),
    },
    {
        "name": "list_topics",
        "description": "List all topics",
        "parameters": obj({"queries": QUERY_FILTERS, "search": SEARCH}),
    },
    {
        "name": "update_topic",
        "description": "Update topic by ID",
        "parameters": obj(
            {"topicId": TOPIC_ID, "name": string("Topic name"), "subscribe": string_list("Roles that can subscribe")},
            ["topicId"],
        ),
    },
    {
        "name": "delete_topic",
        "description": "Delete topic by ID",
        "parameters": obj({"topicId": TOPIC_ID}, ["topicId"]),
    },

    # Subscribers
    {
        "name": "create_subscriber",
        "description": "Add a subscriber to a topic",
        "parameters": obj(
            {
                "topicId": TOPIC_ID,
                "subscriberId": string("Subscriber ID"),
                "targetId": string("Target ID (user target)"),
            },
            ["topicId", "subscriberId", "targetId"],
        ),
    },
    {
        "name": "list_subscribers",
        "description": "List subscribers of a topic",
        "parameters": obj({"topicId": TOPIC_ID, "queries": QUERY_FILTERS, "search": SEARCH}, ["topicId"]),
    },
    {
        "name": "delete_subscriber",
        "description": "Remove a subscriber from a topic",
        "parameters": obj({"topicId": TOPIC_ID, "subscriberId": string("Subscriber ID")}, ["topicId", "subscriberId"]),
    },

    # Messages
    {
        "name": "create_email",
        "description": "Create and send an email message",
        "parameters": obj(
            {
                "messageId": MESSAGE_ID,
                "subject": string("Email subject"),
                "content": string("Email body (HTML supported)"),
                "topics": string_list("Topic IDs to send to"),
                "users": string_list("User IDs to send to"),
                "targets": string_list("Target IDs to send to"),
                "cc": string_list("CC email addresses"),
                "bcc": string_list("BCC email addresses"),
                "draft": DRAFT,
                "html": boolean("Content is HTML"),
                "scheduledAt": SCHEDULED_AT,
            },
            ["subject", "content"],
        ),
    },
    {
        "name": "create_sms",
        "description": "Create and send an SMS message",
        "parameters": obj(
            {
                "messageId": MESSAGE_ID,
                "content": string("SMS content"),
                "topics": string_list("Topic IDs"),
                "users": string_list("User IDs"),
                "targets": string_list("Target IDs"),
                "draft": DRAFT,
                "scheduledAt": SCHEDULED_AT,
            },
            ["content"],
        ),
    },
    {
        "name": "create_push",
        "description": "Create and send a push notification",
        "parameters": obj(
            {
                "messageId": MESSAGE_ID,
                "title": string("Notification title"),
                "body": string("Notification body"),
                "topics": string_list("Topic IDs"),
                "users": string_list("User IDs"),
                "targets": string_list("Target IDs"),
                "data": {"type": "object", "description": "Custom data payload"},
                "action": string("Click action URL"),
                "icon": string("Icon URL"),
                "sound": string("Sound file"),
                "color": string("Notification color"),
                "tag": string("Notification tag"),
                "badge": integer("Badge count"),
                "draft": DRAFT,
                "scheduledAt": SCHEDULED_AT,
            },
            ["title", "body"],
        ),
    },
    {
        "name": "get_message",
        "description": "Get message by ID",
        "parameters": obj({"messageId": MESSAGE_ID}, ["messageId"]),
    },
    {
        "name": "list_messages",
        "description": "List all messages",
        "parameters": obj({"queries": QUERY_FILTERS, "search": SEARCH}),
    },
    {
        "name": "delete_message",
        "description": "Delete message by ID",
        "parameters": obj({"messageId": MESSAGE_ID}, ["messageId"]),
    },

    # Providers
    {
        "name": "list_providers",
        "description": "List all messaging providers",
        "parameters": obj({"queries": QUERY_FILTERS, "search": SEARCH}),
    },
    {
        "name": "get_provider",
        "description": "Get provider by ID",
        "parameters": obj({"providerId": PROVIDER_ID}, ["providerId"]),
    },
    {
        "name": "delete_provider",
        "description": "Delete provider by ID",
        "parameters": obj({"providerId": PROVIDER_ID}, ["providerId"]),
    },
    {
        "name": "create_smtp_provider",
        "description": "Create SMTP email provider",
        "parameters": obj(
            {
                "providerId": PROVIDER_ID,
                "name": string("Provider name"),
                "host": string("SMTP host"),
                "port": integer("SMTP port"),
                "username": string("SMTP username"),
                "password": string("SMTP password"),
                "encryption": enum(["none", "ssl", "tls"], "Encryption type"),
                "autoTLS": boolean("Auto TLS"),
                "mailer": string("Mailer name"),
                "fromName": string("From name"),
                "fromEmail": string("From email"),
                "replyToName": string("Reply-to name"),
                "replyToEmail": string("Reply-to email"),
                "enabled": boolean("Enable provider"),
            },
            ["name", "host"],
        ),
    },
]


async def create_topic(appwrite, arguments):
    topic_id = arguments.get("topicId") or ID.unique()
    return await run_sync(appwrite.messaging.create_topic, topic_id, arguments["name"], arguments.get("subscribe"))


async def get_topic(appwrite, arguments):
    return await run_sync(appwrite.messaging.get_topic, arguments["topicId"])


async def list_topics(appwrite, arguments):
    return await run_sync(appwrite.messaging.list_topics, arguments.get("queries"), arguments.get("search"))


async def update_topic(appwrite, arguments):
    return await run_sync(
        appwrite.messaging.update_topic, arguments["topicId"], arguments.get("name"), arguments.get("subscribe")
    )


async def delete_topic(appwrite, arguments):
    await run_sync(appwrite.messaging.delete_topic, arguments["topicId"])
    return deleted("Topic", arguments["topicId"])


async def create_subscriber(appwrite, arguments):
    return await run_sync(
        appwrite.messaging.create_subscriber, arguments["topicId"], arguments["subscriberId"], arguments["targetId"]
    )


async def list_subscribers(appwrite, arguments):
    return await run_sync(
        appwrite.messaging.list_subscribers, arguments["topicId"], arguments.get("queries"), arguments.get("search")
    )


async def delete_subscriber(appwrite, arguments):
    await run_sync(appwrite.messaging.delete_subscriber, arguments["topicId"], arguments["subscriberId"])
    return deleted("Subscriber", arguments["subscriberId"], verb="removed")


async def create_email(appwrite, arguments):
    message_id = arguments.get("messageId") or ID.unique()
    return await run_sync(
        appwrite.messaging.create_email,
        message_id,
        arguments["subject"],
        arguments["content"],
        arguments.get("topics"),
        arguments.get("users"),
        arguments.get("targets"),
        arguments.get("cc"),
        arguments.get("bcc"),
        None,  # attachments
        arguments.get("draft"),
        arguments.get("html"),
        arguments.get("scheduledAt"),
    )


async def create_sms(appwrite, arguments):
    message_id = arguments.get("messageId") or ID.unique()
    return await run_sync(
        appwrite.messaging.create_sms,
        message_id,
        arguments["content"],
        arguments.get("topics"),
        arguments.get("users"),
        arguments.get("targets"),
        arguments.get("draft"),
        arguments.get("scheduledAt"),
    )


async def create_push(appwrite, arguments):
    message_id = arguments.get("messageId") or ID.unique()
    # Keywords: the SDK signature has parameters (image, priority, ...) this tool does not expose.
    return await run_sync(
        appwrite.messaging.create_push,
        message_id,
        title=arguments["title"],
        body=arguments["body"],
        topics=arguments.get("topics"),
        users=arguments.get("users"),
        targets=arguments.get("targets"),
        data=arguments.get("data"),
        action=arguments.get("action"),
        icon=arguments.get("icon"),
        sound=arguments.get("sound"),
        color=arguments.get("color"),
        tag=arguments.get("tag"),
        badge=arguments.get("badge"),
        draft=arguments.get("draft"),
        scheduled_at=arguments.get("scheduledAt"),
    )


async def get_message(appwrite, arguments):
    return await run_sync(appwrite.messaging.get_message, arguments["messageId"])


async def list_messages(appwrite, arguments):
    return await run_sync(appwrite.messaging.list_messages, arguments.get("queries"), arguments.get("search"))


async def delete_message(appwrite, arguments):
    await run_sync(appwrite.messaging.delete, arguments["messageId"])
    return deleted("Message", arguments["messageId"])


async def list_providers(appwrite, arguments):
    return await run_sync(appwrite.messaging.list_providers, arguments.get("queries"), arguments.get("search"))


async def get_provider(appwrite, arguments):
    return await run_sync(appwrite.messaging.get_provider, arguments["providerId"])


async def delete_provider(appwrite, arguments):
    await run_sync(appwrite.messaging.delete_provider, arguments["providerId"])
    return deleted("Provider", arguments["providerId"])


async def create_smtp_provider(appwrite, arguments):
    provider_id = arguments.get("providerId") or ID.unique()
    encryption = arguments.get("encryption")
    return await run_sync(
        appwrite.messaging.create_smtp_provider,
        provider_id,
        arguments["name"],
        arguments["host"],
        arguments.get("port"),
        arguments.get("username"),
        arguments.get("password"),
        SmtpEncryption(encryption) if encryption is not None else None,
        arguments.get("autoTLS"),
        arguments.get("mailer"),
        arguments.get("fromName"),
        arguments.get("fromEmail"),
        arguments.get("replyToName"),
        arguments.get("replyToEmail"),
        arguments.get("enabled"),
    )


handlers = {
    "create_topic": create_topic,
    "get_topic": get_topic,
    "list_topics": list_topics,
    "update_topic": update_topic,
    "delete_topic": delete_topic,
    "create_subscriber": create_subscriber,
    "list_subscribers": list_subscribers,
    "delete_subscriber": delete_subscriber,
    "create_email": create_email,
    "create_sms": create_sms,
    "create_push": create_push,
    "get_message": get_message,
    "list_messages": list_messages,
    "delete_message": delete_message,
    "list_providers": list_providers,
    "get_provider": get_provider,
    "delete_provider": delete_provider,
    "create_smtp_provider": create_smtp_provider,
}
