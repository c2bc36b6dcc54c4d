"""
Read-only user statistics.
"""
