"""User operations on the API gateway and the interactive steps that drive them."""

from __future__ import annotations

import re
from typing import Any, Callable, Mapping, TypeVar

from messenger_cli.gateway import GatewayClient, GatewayError
from messenger_cli.models import (
    CreateUserRequest,
    CreateUserResponse,
    LoginRequest,
    LoginResponse,
)

SUCCESS_PREFIX = "Пользователь успешно создан с ID: "

_INT_TEXT = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_T = TypeVar("_T")

Ask = Callable[[str], str]
Out = Callable[[str], Any]


def extract_id_from_success_message(message: str) -> int:
    """Return the user ID carried by the gateway's success message."""
    if not message.startswith(SUCCESS_PREFIX):
        raise ValueError("неверный формат сообщения")
    text = message[len(SUCCESS_PREFIX):]
    if not _INT_TEXT.fullmatch(text):
        raise ValueError(f"не удалось преобразовать ID в число: invalid syntax: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"не удалось преобразовать ID в число: value out of range: {text!r}")
    return value


def _decode(data: Any, parse: Callable[[Any], _T], empty: Callable[[], _T]) -> _T:
    if data is None:
        return empty()
    try:
        return parse(data)
    except (TypeError, ValueError) as exc:
        raise GatewayError(f"не удалось распарсить ответ: {exc}") from exc


def _success_field(data: Any) -> str:
    if not isinstance(data, Mapping):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    value = data.get("success")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"field 'success' must be a string, got {value!r}")
    return value


def _users_field(data: Any) -> list[CreateUserRequest]:
    if not isinstance(data, Mapping):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    items = data.get("users")
    if items is None:
        return []
    if not isinstance(items, list):
        raise TypeError(f"field 'users' must be a list, got {items!r}")
    return [CreateUserRequest.from_dict(item) for item in items]


class UserClient(GatewayClient):
    """Client for the gateway's user endpoints."""

    def create_user(self, request: CreateUserRequest) -> CreateUserResponse:
        """Register a user and return the ID the gateway assigned."""
        data = self.post_json("users/create", request.to_dict())
        success = _decode(data, _success_field, str)
        try:
            user_id = extract_id_from_success_message(success)
        except ValueError as exc:
            raise GatewayError(f"не удалось извлечь ID из ответа: {exc}") from exc
        return CreateUserResponse(success=success, id=user_id)

    def get_users(self, params: Mapping[str, str]) -> list[CreateUserRequest]:
        """Search users by the non-empty filters in ``params``."""
        query = {key: value for key, value in sorted(params.items()) if value != ""}
        if not query:
            raise ValueError("нужно указать хотя бы один параметр")
        data = self.get_json("users/get", query)
        return _decode(data, _users_field, list)

    def login(self, request: LoginRequest) -> LoginResponse:
        """Check credentials and return the gateway's reply."""
        data = self.post_json("users/login", request.to_dict())
        return _decode(data, LoginResponse.from_dict, LoginResponse)


def create_user_case(client: UserClient, ask: Ask = input, out: Out = print) -> None:
    """Prompt for a new user's details and create the user."""
    login = ask("Введите имя пользователя (login):")
    typed = ask("Введите пароль:")
    first_name = ask("Введите имя:")
    last_name = ask("Введите фамилию:")
    email = ask("Введите email:")
    phone = ask("Введите телефон:")

    request = CreateUserRequest(
        login=login,
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone=phone,
        password=typed,
    )
    try:
        response = client.create_user(request)
    except GatewayError as exc:
        out(f"Ошибка при создании пользователя: {exc}")
        return
    out(f"Пользователь успешно создан, ID: {response.id}")


_FILTERS = (
    ("login", "Фильтр по логину (оставьте пустым, если не нужен):"),
    ("first_name", "Фильтр по имени (оставьте пустым, если не нужен):"),
    ("last_name", "Фильтр по фамилии (оставьте пустым, если не нужен):"),
    ("email", "Фильтр по email (оставьте пустым, если не нужен):"),
    ("phone", "Фильтр по телефону (оставьте пустым, если не нужен):"),
)


def get_users_case(client: UserClient, ask: Ask = input, out: Out = print) -> None:
    """Prompt for search filters and list the matching users."""
    answers = [(key, ask(prompt)) for key, prompt in _FILTERS]
    params = {key: value for key, value in answers if value != ""}
    if not params:
        out("Нужно указать хотя бы один параметр фильтра.")
        return

    try:
        users = client.get_users(params)
    except (GatewayError, ValueError) as exc:
        out(f"Ошибка при получении пользователей: {exc}")
        return

    out("Пользователи:")
    for user in users:
        out(
            f"Login: {user.login}, Email: {user.email}, "
            f"Имя: {user.first_name} {user.last_name}, Телефон: {user.phone}"
        )


def login_case(client: UserClient, ask: Ask = input, out: Out = print) -> None:
    """Prompt for credentials and show the user's ID."""
    login = ask("Введите имя пользователя (login):")
    typed = ask("Введите пароль:")
    try:
        response = client.login(LoginRequest(login=login, password=typed))
    except GatewayError as exc:
        out(f"Ошибка при входе: {exc}")
        return
    out(f"Ваш ID {response.user_id}")