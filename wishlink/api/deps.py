"""
wishlink/api/deps.py

Purpose: Request dependencies

- Resolves the AppContext attached to the running app
- Session guard for "my wishes" views
"""

from fastapi import Depends, Request

from wishlink.core.context import AppContext
from wishlink.core.exceptions import AuthenticationError
from wishlink.models.user import UserProfile


async def get_context(request: Request) -> AppContext:
    return request.app.state.context


async def require_user(context: AppContext = Depends(get_context)) -> UserProfile:
    """
    Returns the logged-in user or fails with 401.
    """
    user = context.auth.current_user()
    if user is None:
        raise AuthenticationError("Login required")
    return user
