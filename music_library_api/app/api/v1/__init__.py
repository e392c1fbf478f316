"""
Version 1 of the Music Library API.
"""
