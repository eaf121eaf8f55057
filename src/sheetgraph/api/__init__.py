"""
HTTP surface for generated GraphQL schemas.
"""
