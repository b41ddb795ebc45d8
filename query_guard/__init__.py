"""Static query admission control for a Strawberry GraphQL API."""

__version__ = "1.0.0"
