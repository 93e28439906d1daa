"""
Parse parameter names from a ``:name`` SQL template.

Re-exports parse_parameters from template_engine.
"""

from graphboard.engines.sql.template_engine import SQLTemplateEngine


def parse_parameters(template: str) -> list[str]:
    """
    Extract ``:name`` placeholders from *template*.

    Returns each distinct name once, in order of first appearance; an empty
    list when the template has no placeholders.
    """
    return SQLTemplateEngine().parse_parameters(template)
