from nestlint.parser.errors import ParseError
from nestlint.parser.transformer import parse_stylesheet

__all__ = ["ParseError", "parse_stylesheet"]
