"""
Flask JSON API for editors and CI reporters.
"""
