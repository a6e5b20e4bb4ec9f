"""actionwizard - declarative interactive actions."""

__version__ = "0.1.0"
