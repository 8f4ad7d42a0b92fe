"""
Command-line interface for the scraper.
"""
