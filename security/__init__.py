"""
security/ - Authorization
=========================
Predicates and guards deciding whether the current actor may act on a
user's or a family's data. Authentication itself (tokens, passwords) is
handled by the caller, which passes the resulting `Actor` in.
"""
