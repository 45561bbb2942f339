"""API Resilience Implementations.

Contains the retry executor applying exponential backoff with jitter
to paginated AWS listing calls.
Bounded Context: API Resilience
"""
