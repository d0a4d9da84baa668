"""
Date course backend.

Recommends a themed set of real venues for a Korean neighborhood using
Gemini with Google Maps grounding.
"""

__version__ = "0.1.0"
