"""
minitpl: минимальный шаблонизатор, {{name}} и {{if name}}...{{endif}}.
"""

from .builder import TemplateBuilder, TemplateNotFoundError
from .errors import MinitplUserError
from .template import RenderResult, TemplateParseError, render, render_template

__all__ = [
    "render",
    "render_template",
    "RenderResult",
    "TemplateBuilder",
    "TemplateNotFoundError",
    "TemplateParseError",
    "MinitplUserError",
]
