"""
Web interface for the title engine.
"""
