"""
Core module - configuration, authentication, access control and errors.
"""
