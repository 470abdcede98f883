"""
Team balancing domain: models, services and errors.
"""
