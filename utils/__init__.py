"""
utils/ - Shared helpers: logging, SQL fragment building, dates, response bodies.
"""
