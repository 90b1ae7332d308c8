"""
BACKEND PACKAGE INITIALIZATION FILE

Flask transport for totp_core: JSON snapshot + SSE stream.
"""

from .app import create_app

__all__ = ['create_app']
