"""
Career Compass - multi-field embedding search for career matching.
"""

VERSION = "1.0.0"
