"""
models/ - Domain Models
=======================
Plain dataclasses built from repository rows. Dates arrive already formatted
as ``YYYYMMDD`` strings.
"""
