import pytest
from appwrite.enums.execution_method import ExecutionMethod
from appwrite.enums.smtp_encryption import SmtpEncryption
from appwrite.input_file import InputFile

from appwrite_mcp.tools import functions, locale, messaging, teams


@pytest.mark.asyncio
async def test_create_deployment_uploads_archive(appwrite, services):
    await functions.create_deployment(appwrite, {"functionId": "fn", "code": "H4sIAAAAAAAA", "activate": True})

    (args, _), = services["functions"].calls_to("create_deployment")
    assert args[0] == "fn"
    assert isinstance(args[1], InputFile)
    assert args[1].filename == "code.tar.gz"
    assert args[2:] == (True, None, None)


@pytest.mark.asyncio
async def test_create_execution_converts_method(appwrite, services):
    await functions.create_execution(appwrite, {"functionId": "fn", "body": "{}", "async": True, "method": "POST"})

    assert services["functions"].calls_to("create_execution") == [
        (("fn", "{}", True, None, ExecutionMethod("POST"), None, None), {})
    ]


@pytest.mark.asyncio
async def test_delete_variable_acknowledgement(appwrite):
    result = await functions.delete_variable(appwrite, {"functionId": "fn", "variableId": "v1"})
    assert result == {"success": True, "message": "Variable v1 deleted"}


@pytest.mark.asyncio
async def test_create_push_uses_keywords(appwrite, services):
    await messaging.create_push(appwrite, {"messageId": "m1", "title": "Hi", "body": "There", "badge": 3})

    (args, kwargs), = services["messaging"].calls_to("create_push")
    assert args == ("m1",)
    assert kwargs["title"] == "Hi"
    assert kwargs["body"] == "There"
    assert kwargs["badge"] == 3
    assert kwargs["scheduled_at"] is None


@pytest.mark.asyncio
async def test_create_email_skips_attachments(appwrite, services):
    await messaging.create_email(appwrite, {"messageId": "m1", "subject": "S", "content": "C", "html": True})

    (args, _), = services["messaging"].calls_to("create_email")
    assert args == ("m1", "S", "C", None, None, None, None, None, None, None, True, None)


@pytest.mark.asyncio
async def test_create_smtp_provider_converts_encryption(appwrite, services):
    await messaging.create_smtp_provider(appwrite, {"providerId": "p1", "name": "Mail", "host": "smtp.test", "encryption": "tls"})

    (args, _), = services["messaging"].calls_to("create_smtp_provider")
    assert args[:3] == ("p1", "Mail", "smtp.test")
    assert args[6] == SmtpEncryption("tls")


@pytest.mark.asyncio
async def test_delete_subscriber_says_removed(appwrite):
    result = await messaging.delete_subscriber(appwrite, {"topicId": "t1", "subscriberId": "s1"})
    assert result == {"success": True, "message": "Subscriber s1 removed"}


@pytest.mark.asyncio
async def test_update_team_renames(appwrite, services):
    await teams.update_team(appwrite, {"teamId": "t1", "name": "Core"})
    assert services["teams"].calls_to("update_name") == [(("t1", "Core"), {})]


@pytest.mark.asyncio
async def test_locale_listings_call_matching_methods(appwrite, services):
    for tool_name, (method_name, _) in locale.LISTINGS.items():
        await locale.handlers[tool_name](appwrite, {})
    assert [name for name, _, _ in services["locale"].calls] == [method for method, _ in locale.LISTINGS.values()]
