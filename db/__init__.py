"""
db/ - Database Layer
====================
Handles PostgreSQL connections, schema initialization, and execution of
`$n`-parameterized SQL.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
