"""
Infrastructure layer: parsing, fetching, caching and the adapters
that implement the domain ports.
"""
