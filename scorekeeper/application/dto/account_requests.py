"""Account management request DTOs"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class RegisterRequest:
    username: Optional[str] = None
    password: Optional[str] = None
    display_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'RegisterRequest':
        return cls(
            username=data.get('username'),
            password=data.get('password'),
            display_name=data.get('display_name')
        )


@dataclass
class ChangeDisplayNameRequest:
    display_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'ChangeDisplayNameRequest':
        return cls(display_name=data.get('display_name'))


@dataclass
class ChangePasswordRequest:
    password: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'ChangePasswordRequest':
        return cls(password=data.get('password'))
