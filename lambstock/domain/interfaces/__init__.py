"""Domain Interfaces (Abstract Base Classes).

Defines the contracts implemented by the infrastructure layer.
"""
