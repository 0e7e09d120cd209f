"""
Services module - business operations over the MongoDB collections.

Each service takes the resolved caller explicitly and enforces access
control itself, so routes stay thin.
"""
