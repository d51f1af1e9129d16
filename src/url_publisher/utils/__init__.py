from .env import FALSE_VALUES, TRUE_VALUES, parse_bool, parse_positive_float

__all__ = ["TRUE_VALUES", "FALSE_VALUES", "parse_bool", "parse_positive_float"]
