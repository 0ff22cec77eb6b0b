"""Explore OpenAPI/Swagger specifications and send live requests against them."""

__version__ = "0.1.0"
