"""nestlint -- nesting-depth checks for nested stylesheets."""

__version__ = "0.1.0"
