import logging
import os
import sys


def configure_logging():
    """Configure consistent logging across the server, with the level taken from LOG_LEVEL."""
    log_level = getattr(logging, os.environ.get('LOG_LEVEL', 'INFO').upper(), logging.INFO)

    # stdout carries the MCP stream, so logs must go to stderr
    handlers = [logging.StreamHandler(sys.stderr)]

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )

    logging.getLogger('appwrite_mcp').setLevel(log_level)

    # Reduce noise from HTTP and protocol libraries
    logging.getLogger('aiohttp').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('mcp').setLevel(logging.WARNING)

    logging.getLogger(__name__).info(f"Logging configured: level={logging.getLevelName(log_level)}")


def get_request_logger(request_id=None, name='appwrite_mcp.request'):
    """
    Get a logger that includes request ID in messages

    Args:
        request_id: Optional request ID to include in log messages

    Returns:
        A LoggerAdapter that prefixes messages with the request ID
    """
    return RequestLoggerAdapter(logging.getLogger(name), {'request_id': request_id})


class RequestLoggerAdapter(logging.LoggerAdapter):
    def process(self, msg, kwargs):
        request_id = self.extra.get('request_id')
        return (f"[{request_id}] {msg}" if request_id else msg), kwargs
