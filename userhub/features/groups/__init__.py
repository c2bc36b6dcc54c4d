"""
Group management feature module.

Groups collect users and carry permission grants.
"""
