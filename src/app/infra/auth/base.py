# src/app/infra/auth/base.py
"""
Abstract base class for the authentication provider.
This interface allows swapping the hosted auth service for a stub in tests.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

from src.app.domain.models import Account, AuthSession

SessionListener = Callable[[str, Optional[AuthSession]], None]
Unsubscribe = Callable[[], None]

# Event names emitted to session listeners
SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"
TOKEN_REFRESHED = "TOKEN_REFRESHED"


class AuthProvider(ABC):
    """
    Interface for account and session operations.

    Implementations:
    - SupabaseAuthProvider: Supabase Auth (GoTrue)
    """

    @abstractmethod
    def sign_up(self, email: str, password: str) -> Optional[Account]:
        """
        Create an account.

        Returns:
            The created account, or None when the service withholds it
            (e.g. pending email confirmation)

        Raises:
            AuthenticationError: If the service rejects the request
        """
        pass

    @abstractmethod
    def sign_in(self, email: str, password: str) -> AuthSession:
        """
        Establish a session from email and password.

        Raises:
            AuthenticationError: On bad credentials or service failure
        """
        pass

    @abstractmethod
    def sign_out(self) -> None:
        pass

    @abstractmethod
    def get_session(self) -> Optional[AuthSession]:
        pass

    @abstractmethod
    def get_account(self) -> Optional[Account]:
        pass

    @abstractmethod
    def subscribe(self, listener: SessionListener) -> Unsubscribe:
        """
        Register a listener for session changes (sign in, sign out, refresh).

        Returns:
            A callable that releases the subscription
        """
        pass
