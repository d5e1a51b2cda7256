"""
Utilities Package

Helpers used across the application:
- responses.py: the uniform response envelope builder
"""
