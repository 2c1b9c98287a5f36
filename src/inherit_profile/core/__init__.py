"""Core library: profile discovery, settings inheritance and the managed block.

The CLI (``inherit_profile.cli``) is a thin layer over these modules.
"""
