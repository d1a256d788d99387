"""
crudforge core: schema parsing, model extraction, and auth annotations.
"""
