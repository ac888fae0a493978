"""
Deployment and migration scripts for the Lido DAO contracts.
"""

__version__ = "0.1.0"
