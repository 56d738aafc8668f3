from .base import ExplanationFormatter
from .templates import ENGLISH, ICELANDIC, TemplateFormatter, get_formatter

__all__ = ["ExplanationFormatter", "TemplateFormatter", "ENGLISH", "ICELANDIC", "get_formatter"]
