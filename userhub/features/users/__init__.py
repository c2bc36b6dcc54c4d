"""
User management feature module.

Create, edit and soft-delete users and reconcile their group memberships.
"""
