from .encoding import decode_base64, encode_base64, image_result, to_jsonable
from .logging import configure_logging, get_request_logger

__all__ = ['configure_logging', 'decode_base64', 'encode_base64', 'get_request_logger', 'image_result', 'to_jsonable']
