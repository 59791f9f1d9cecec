"""
services/ - Business Logic Layer
================================
Each service applies the authorization rules for one entity and then
delegates to its repository. Every guarded method takes the current
`Actor` as its first argument.
"""
