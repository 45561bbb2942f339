"""Core Layer: pagination, tag filters, aggregation and presentation logic.

Orchestrates the domain models and infrastructure adapters.
"""
