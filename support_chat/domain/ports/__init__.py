"""
PORTS - Interfaces the infrastructure layer implements.
"""
