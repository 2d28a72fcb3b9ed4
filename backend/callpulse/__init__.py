"""
CallPulse backend

Schema discovery and response normalization for the supervisor analytics
dashboard.
"""

__version__ = "1.0.0"
