"""Codify core - scanning, templates and document persistence.

Modules:
- config: environment-driven settings
- models: annotation and scan result models
- scanner: glob resolution and marker extraction
- templates: prompt template loading and rendering
- documents: markdown files written for the calling agent
"""

__version__ = "1.0.0"
