"""Infrastructure Layer: concrete adapters for AWS, configuration,
logging, console output and resilience.
"""
