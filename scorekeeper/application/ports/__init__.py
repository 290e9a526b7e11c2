from .user_repository_port import UserRepositoryPort
from .random_source_port import RandomSourcePort
from .authenticator_port import AuthenticatorPort

__all__ = [
    'UserRepositoryPort',
    'RandomSourcePort',
    'AuthenticatorPort'
]
