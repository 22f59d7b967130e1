"""Local task repository library: configuration, templates, tag index, project detection and request routing."""

__version__ = "0.1.0"