"""
Schemas module - request bodies, response shapes and the import row.
"""
