"""Adapters for the AWS Lambda and Resource Groups Tagging APIs."""
