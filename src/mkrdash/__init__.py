"""mkrdash - Mackerel custom dashboards from the command line."""

__version__ = "0.1.0"
