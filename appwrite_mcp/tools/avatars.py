from appwrite.enums.browser import Browser
from appwrite.enums.credit_card import CreditCard
from appwrite.enums.flag import Flag

from ..appwrite_client import run_sync
from ..utils.encoding import image_result
from .common import boolean, enum, integer, obj, string

name = "avatars"
description = "Generated images: initials, QR codes, favicons, icons and flags."

BROWSER_CODES = [
    "aa", "an", "ch", "ci", "cm", "cr", "df", "ec", "ed", "ep", "er", "ff", "fx", "ga", "go", "gr", "gt", "ht",
    "ia", "ic", "ir", "ko", "mi", "mm", "mo", "mz", "nb", "nr", "og", "op", "or", "ot", "ov", "ow", "ps", "pt",
    "qp", "qt", "qw", "qx", "sa", "sf", "sm", "sr", "te", "to", "tv", "tw", "uc", "vi", "wc", "we", "wh", "wm",
    "wo", "ya", "yo",
]

CREDIT_CARD_CODES = [
    "amex", "argencard", "cabal", "cencosud", "diners", "discover", "elo", "hipercard", "jcb", "mastercard",
    "naranja", "targeta-shopping", "union-china-pay", "visa", "mir", "maestro",
]

ICON_SIZE = {
    "width": integer("Image width (0-2000, default: 100)"),
    "height": integer("Image height (0-2000, default: 100)"),
    "quality": integer("Image quality (0-100, default: 100)"),
}

tools = [
    {
        "name": "get_avatar_initials",
        "description": "Get user initials avatar image",
        "parameters": obj(
            {
                "name": string("Full name to generate initials from"),
                "width": integer("Image width (0-2000, default: 500)"),
                "height": integer("Image height (0-2000, default: 500)"),
                "background": string("Background color hex (without #)"),
            }
        ),
    },
    {
        "name": "get_avatar_image",
        "description": "Get avatar image from URL",
        "parameters": obj(
            {
                "url": string("URL of the image"),
                "width": integer("Image width (0-2000, default: 400)"),
                "height": integer("Image height (0-2000, default: 400)"),
            },
            ["url"],
        ),
    },
    {
        "name": "get_qr_code",
        "description": "Generate a QR code image",
        "parameters": obj(
            {
                "text": string("Text/URL to encode in QR code"),
                "size": integer("QR code size (1-1000, default: 400)"),
                "margin": integer("Margin around QR code (0-10, default: 1)"),
                "download": boolean("Return as downloadable file"),
            },
            ["text"],
        ),
    },
    {
        "name": "get_favicon",
        "description": "Get favicon from a website URL",
        "parameters": obj({"url": string("Website URL to get favicon from")}, ["url"]),
    },
    {
        "name": "get_browser_icon",
        "description": "Get browser icon by code",
        "parameters": obj({"code": enum(BROWSER_CODES, "Browser code"), **ICON_SIZE}, ["code"]),
    },
    {
        "name": "get_credit_card_icon",
        "description": "Get credit card icon by provider",
        "parameters": obj({"code": enum(CREDIT_CARD_CODES, "Credit card provider code"), **ICON_SIZE}, ["code"]),
    },
    {
        "name": "get_flag",
        "description": "Get country flag image by country code",
        "parameters": obj(
            {"code": string("ISO 3166-1 alpha-2 country code (e.g., 'us', 'kr', 'jp')"), **ICON_SIZE},
            ["code"],
        ),
    },
]


async def get_avatar_initials(appwrite, arguments):
    data = await run_sync(
        appwrite.avatars.get_initials,
        arguments.get("name"),
        arguments.get("width"),
        arguments.get("height"),
        arguments.get("background"),
    )
    return image_result(data, f"Initials avatar for {arguments.get('name') or 'default'}")


async def get_avatar_image(appwrite, arguments):
    data = await run_sync(
        appwrite.avatars.get_image, arguments["url"], arguments.get("width"), arguments.get("height")
    )
    return image_result(data, f"Avatar from URL: {arguments['url']}")


async def get_qr_code(appwrite, arguments):
    data = await run_sync(
        appwrite.avatars.get_qr,
        arguments["text"],
        arguments.get("size"),
        arguments.get("margin"),
        arguments.get("download"),
    )
    return image_result(data, f"QR code for: {arguments['text']}")


async def get_favicon(appwrite, arguments):
    data = await run_sync(appwrite.avatars.get_favicon, arguments["url"])
    return image_result(data, f"Favicon from: {arguments['url']}")


async def _icon(method, code, arguments):
    # The SDK substitutes the code into the URL path, so it must be a plain string.
    return await run_sync(method, code, arguments.get("width"), arguments.get("height"), arguments.get("quality"))


async def get_browser_icon(appwrite, arguments):
    data = await _icon(appwrite.avatars.get_browser, Browser(arguments["code"]).value, arguments)
    return image_result(data, f"Browser icon: {arguments['code']}")


async def get_credit_card_icon(appwrite, arguments):
    data = await _icon(appwrite.avatars.get_credit_card, CreditCard(arguments["code"]).value, arguments)
    return image_result(data, f"Credit card icon: {arguments['code']}")


async def get_flag(appwrite, arguments):
    data = await _icon(appwrite.avatars.get_flag, Flag(arguments["code"]).value, arguments)
    return image_result(data, f"Flag: {arguments['code']}")


handlers = {
    "get_avatar_initials": get_avatar_initials,
    "get_avatar_image": get_avatar_image,
    "get_qr_code": get_qr_code,
    "get_favicon": get_favicon,
    "get_browser_icon": get_browser_icon,
    "get_credit_card_icon": get_credit_card_icon,
    "get_flag": get_flag,
}
