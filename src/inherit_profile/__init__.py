"""
inherit-profile - inherited settings for editor profiles

Computes the settings a profile is missing from its declared parent profiles
and keeps them in a managed block of the profile's settings.json, leaving
everything written by hand untouched.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
