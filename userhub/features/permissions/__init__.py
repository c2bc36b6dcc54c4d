"""
Permission catalogue feature module.
"""
