"""
Taskgate - multi-user task tracking API with bearer-token authentication.
"""

__version__ = "1.0.0"
