"""
Shared helpers for resource implementations.

Modules:
    azure: Resource ID parsing, location normalisation, common schema fields
    tags: Tag schema and expand/flatten
    validate: Attribute validators
    response: Not-found detection for SDK errors, raw JSON responses
    tf: Requires-import check
    utils: Slice expand/flatten helpers
"""
