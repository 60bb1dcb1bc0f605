"""Application services layer.

Services contain business logic and orchestrate repositories.
"""
from .auth_service import AuthService, extract_token

__all__ = [
    'AuthService',
    'extract_token',
]
