"""hbs - Handlebars template renderer for the command line.

Renders Handlebars templates with helpers, partials and JSON data sources.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
