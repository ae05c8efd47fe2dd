"""Request and response records exchanged with the API gateway."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_RFC3339 = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt ](\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})$"
)


def parse_timestamp(text: str) -> datetime:
    """Parse an RFC 3339 timestamp, keeping up to microsecond precision."""
    match = _RFC3339.match(text)
    if match is None:
        raise ValueError(f"invalid RFC 3339 timestamp: {text!r}")
    year, month, day, hour, minute, second, fraction, zone = match.groups()
    microsecond = int((fraction or "").ljust(6, "0")[:6])
    if zone in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = 1 if zone[0] == "+" else -1
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
    return datetime(
        int(year), int(month), int(day),
        int(hour), int(minute), int(second), microsecond, tzinfo=tz,
    )


def _mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"field {key!r} must be an integer, got {value!r}")
    return value


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"field {key!r} must be a string, got {value!r}")
    return value


def _bool(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"field {key!r} must be a boolean, got {value!r}")
    return value


def _list(data: Mapping[str, Any], key: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"field {key!r} must be a list, got {value!r}")
    return value


@dataclass(frozen=True)
class CreateDialogRequest:
    user_id: int
    peer_id: int
    dialog_name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "peer_id": self.peer_id,
            "dialog_name": self.dialog_name,
        }


@dataclass(frozen=True)
class CreateDialogResponse:
    dialog_id: int = 0
    dialog_name: str = ""
    success: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> CreateDialogResponse:
        data = _mapping(data)
        return cls(
            dialog_id=_int(data, "dialog_id"),
            dialog_name=_str(data, "dialog_name"),
            success=_bool(data, "success"),
        )


@dataclass(frozen=True)
class Message:
    id: int = 0
    user_id: int = 0
    text: str = ""
    timestamp: datetime = ZERO_TIME

    @classmethod
    def from_dict(cls, data: Any) -> Message:
        data = _mapping(data)
        raw = data.get("timestamp")
        if raw is None:
            timestamp = ZERO_TIME
        elif isinstance(raw, str):
            timestamp = parse_timestamp(raw)
        else:
            raise TypeError(f"field 'timestamp' must be a string, got {raw!r}")
        return cls(
            id=_int(data, "id"),
            user_id=_int(data, "user_id"),
            text=_str(data, "text"),
            timestamp=timestamp,
        )


@dataclass(frozen=True)
class GetDialogMessagesResponse:
    messages: list[Message] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> GetDialogMessagesResponse:
        data = _mapping(data)
        return cls(messages=[Message.from_dict(item) for item in _list(data, "messages")])


@dataclass(frozen=True)
class SendMessageRequest:
    dialog_id: int
    user_id: int
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "dialog_id": self.dialog_id,
            "user_id": self.user_id,
            "text": self.text,
        }


@dataclass(frozen=True)
class SendMessageResponse:
    message_id: int = 0
    timestamp: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> SendMessageResponse:
        data = _mapping(data)
        return cls(message_id=_int(data, "message_id"), timestamp=_str(data, "timestamp"))


@dataclass(frozen=True)
class Dialog:
    dialog_id: int = 0
    peer_id: int = 0
    peer_login: str = ""
    last_message: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Dialog:
        data = _mapping(data)
        return cls(
            dialog_id=_int(data, "dialog_id"),
            peer_id=_int(data, "peer_id"),
            peer_login=_str(data, "peer_login"),
            last_message=_str(data, "last_message"),
        )


@dataclass(frozen=True)
class GetUserDialogsResponse:
    dialogs: list[Dialog] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> GetUserDialogsResponse:
        data = _mapping(data)
        return cls(dialogs=[Dialog.from_dict(item) for item in _list(data, "dialogs")])


@dataclass(frozen=True)
class CreateUserRequest:
    login: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    password: str = field(default="", repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "login": self.login,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "password": self.password,
        }

    @classmethod
    def from_dict(cls, data: Any) -> CreateUserRequest:
        data = _mapping(data)
        return cls(
            login=_str(data, "login"),
            first_name=_str(data, "first_name"),
            last_name=_str(data, "last_name"),
            email=_str(data, "email"),
            phone=_str(data, "phone"),
            password=_str(data, "password"),
        )


@dataclass(frozen=True)
class CreateUserResponse:
    success: str
    id: int


@dataclass(frozen=True)
class LoginRequest:
    login: str
    password: str = field(repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {"login": self.login, "password": self.password}


@dataclass(frozen=True)
class LoginResponse:
    message: str = ""
    user_id: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> LoginResponse:
        data = _mapping(data)
        return cls(message=_str(data, "message"), user_id=_int(data, "user_id"))