"""Storefront Catalog API Package."""

__version__ = "1.0.0"
__description__ = (
    "Serverless catalog API for products, banners and categories "
    "using AWS Lambda, DynamoDB, Redis and S3"
)

__all__ = ["handlers", "core"]
