"""camelCase <-> snake_case key conversion for JSON API boundaries."""
from casebridge.case import Symbol, camel_to_snake, snake_to_camel
from casebridge.keys import convert_map_keys, dict_keys_to_camel, dict_keys_to_snake, is_record

__all__ = [
    "Symbol",
    "camel_to_snake",
    "snake_to_camel",
    "convert_map_keys",
    "dict_keys_to_camel",
    "dict_keys_to_snake",
    "is_record",
]
