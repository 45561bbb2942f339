"""lambstock: stock management for your AWS Lambda functions."""

__version__ = "0.1.0"
