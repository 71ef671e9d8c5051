"""propdesk: client and CLI for the property-management platform API."""

__version__ = "0.1.0"
