from .response import _json_response, _sanitize_json_payload

__all__ = ["_json_response", "_sanitize_json_payload"]
