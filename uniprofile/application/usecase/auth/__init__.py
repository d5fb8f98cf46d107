"""Auth use cases."""

from .login import LoginRequest, LoginUseCase
from .logout import LogoutUseCase
from .register import RegisterRequest, RegisterUseCase

__all__ = [
    "LoginRequest",
    "LoginUseCase",
    "LogoutUseCase",
    "RegisterRequest",
    "RegisterUseCase",
]
