"""
Background jobs run outside the HTTP process.
"""
