"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories build their statements from `utils.sql` fragments, run them in
a single transaction per call and return domain model objects.
"""
