"""Report formatters"""

from .markdown import MarkdownRenderer
from .json_formatter import JSONFormatter

__all__ = ['MarkdownRenderer', 'JSONFormatter']
