"""Dialog operations on the API gateway and the interactive steps that drive them."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, TypeVar

from messenger_cli.gateway import GatewayClient, GatewayError
from messenger_cli.models import (
    CreateDialogRequest,
    CreateDialogResponse,
    GetDialogMessagesResponse,
    GetUserDialogsResponse,
    SendMessageRequest,
    SendMessageResponse,
)

Ask = Callable[[str], str]
Confirm = Callable[[str, bool], bool]
Out = Callable[[str], Any]

_T = TypeVar("_T")

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_INT_TEXT = re.compile(r"[+-]?[0-9]+")
_INT32_MIN, _INT32_MAX = -(2**31), 2**31 - 1
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1


def format_rfc822(moment: datetime) -> str:
    """Format ``moment`` as ``02 Jan 06 15:04 MST``."""
    zone = _zone_label(moment)
    return (
        f"{moment.day:02d} {_MONTHS[moment.month - 1]} {moment.year % 100:02d} "
        f"{moment.hour:02d}:{moment.minute:02d} {zone}"
    )


def _zone_label(moment: datetime) -> str:
    tzinfo = moment.tzinfo
    offset = moment.utcoffset()
    if tzinfo is None or offset is None:
        return "UTC"
    if not isinstance(tzinfo, timezone):
        name = moment.tzname()
        if name:
            return name
    elif offset == timedelta(0):
        return "UTC"
    minutes = offset // timedelta(minutes=1)
    sign = "-" if minutes < 0 else "+"
    minutes = abs(minutes)
    return f"{sign}{minutes // 60:02d}{minutes % 60:02d}"


def _parse_int32(text: str) -> int:
    if not _INT_TEXT.fullmatch(text):
        raise ValueError(f'strconv.ParseInt: parsing "{text}": invalid syntax')
    value = int(text)
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError(f'strconv.ParseInt: parsing "{text}": value out of range')
    return value


def _answer_int32(text: str) -> int:
    """Read a numeric answer the lenient way: bad input yields 0, big values wrap."""
    if not _INT_TEXT.fullmatch(text):
        return 0
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return 0
    return (value - _INT32_MIN) % 2**32 + _INT32_MIN


def _confirm(message: str, default: bool) -> bool:
    suffix = "(Y/n)" if default else "(y/N)"
    while True:
        answer = input(f"{message} {suffix} ").strip().lower()
        if not answer:
            return default
        if answer in ("y", "yes"):
            return True
        if answer in ("n", "no"):
            return False


def _decode(data: Any, parse: Callable[[Any], _T], empty: Callable[[], _T]) -> _T:
    if data is None:
        return empty()
    try:
        return parse(data)
    except (TypeError, ValueError) as exc:
        raise GatewayError(f"не удалось распарсить ответ: {exc}") from exc


class DialogClient(GatewayClient):
    """Client for the gateway's dialog endpoints."""

    def create_dialog(self, request: CreateDialogRequest) -> CreateDialogResponse:
        """Create a dialog between two users."""
        data = self.post_json("dialog/create", request.to_dict())
        return _decode(data, CreateDialogResponse.from_dict, CreateDialogResponse)

    def get_dialog_messages(
        self, dialog_id: int, limit: int | None = None, offset: int | None = None
    ) -> GetDialogMessagesResponse:
        """Fetch the messages of a dialog, optionally paged."""
        data = self.get_json(
            "dialog/messages",
            {"dialog_id": dialog_id, "limit": limit, "offset": offset},
        )
        return _decode(data, GetDialogMessagesResponse.from_dict, GetDialogMessagesResponse)

    def get_user_dialogs(
        self, user_id: int, limit: int | None = None, offset: int | None = None
    ) -> GetUserDialogsResponse:
        """Fetch the dialogs a user takes part in, optionally paged."""
        data = self.get_json(
            "dialog/user",
            {"user_id": user_id, "limit": limit, "offset": offset},
        )
        return _decode(data, GetUserDialogsResponse.from_dict, GetUserDialogsResponse)

    def send_message(self, request: SendMessageRequest) -> SendMessageResponse:
        """Post a message to a dialog."""
        data = self.post_json("dialog/send", request.to_dict())
        return _decode(data, SendMessageResponse.from_dict, SendMessageResponse)


def create_dialog_case(client: DialogClient, ask: Ask | None = None, out: Out = print) -> None:
    """Prompt for the participants and a name, then create the dialog."""
    ask = ask if ask is not None else input
    user_id = _answer_int32(ask("Введите свой UserID:"))
    peer_id = _answer_int32(ask("Введите PeerID собеседника:"))
    dialog_name = ask("Введите название диалога:")

    request = CreateDialogRequest(user_id=user_id, peer_id=peer_id, dialog_name=dialog_name)
    try:
        response = client.create_dialog(request)
    except GatewayError as exc:
        out(f"Ошибка при создании диалога: {exc}")
        return
    out(f"Диалог успешно создан, ID: {response.dialog_id}")


def get_dialog_messages_case(
    client: DialogClient, ask: Ask | None = None, out: Out = print
) -> None:
    """Prompt for a dialog and paging, then list its messages."""
    ask = ask if ask is not None else input
    dialog_text = ask("Введите ID диалога:")
    limit_text = ask("Введите лимит сообщений (необязательно):")
    offset_text = ask("Введите, сколько сообщений пропустить (необязательно):")

    try:
        dialog_id = _parse_int32(dialog_text)
    except ValueError as exc:
        out(f"Некорректный ID диалога: {exc}")
        return

    limit = offset = None
    if limit_text != "":
        try:
            limit = _parse_int32(limit_text)
        except ValueError as exc:
            out(f"Некорректный лимит: {exc}")
            return
    if offset_text != "":
        try:
            offset = _parse_int32(offset_text)
        except ValueError as exc:
            out(f"Некорректный offset: {exc}")
            return

    try:
        response = client.get_dialog_messages(dialog_id, limit, offset)
    except GatewayError as exc:
        out(f"Ошибка при получении сообщений диалога: {exc}")
        return

    out("Сообщения диалога:")
    for message in response.messages:
        out(
            f"ID: {message.id}, UserID: {message.user_id}, Text: {message.text}, "
            f"Timestamp: {format_rfc822(message.timestamp)}"
        )


def get_user_dialogs_case(
    client: DialogClient,
    ask: Ask | None = None,
    confirm: Confirm | None = None,
    out: Out = print,
) -> None:
    """Prompt for a user and optional paging, then list the user's dialogs."""
    ask = ask if ask is not None else input
    confirm = confirm if confirm is not None else _confirm

    user_id = _answer_int32(ask("Введите ID пользователя:"))
    limit = offset = None
    if confirm("Хотите указать лимит?", False):
        limit = _answer_int32(ask("Введите лимит:"))
    if confirm("Хотите указать, сколько диалогов пропустить?", False):
        offset = _answer_int32(ask("Введите, сколько диалогов пропустить:"))

    try:
        response = client.get_user_dialogs(user_id, limit, offset)
    except GatewayError as exc:
        out(f"Ошибка при получении списка диалогов: {exc}")
        return

    out("Диалоги пользователя:")
    for dialog in response.dialogs:
        out(f"ID: {dialog.dialog_id}, Последнее сообщение: {dialog.last_message}")


def send_message_case(client: DialogClient, ask: Ask | None = None, out: Out = print) -> None:
    """Prompt for a dialog, sender and text, then send the message."""
    ask = ask if ask is not None else input
    dialog_id = _answer_int32(ask("Введите ID диалога:"))
    user_id = _answer_int32(ask("Введите свой UserID:"))
    text = ask("Введите текст сообщения:")

    request = SendMessageRequest(dialog_id=dialog_id, user_id=user_id, text=text)
    try:
        response = client.send_message(request)
    except GatewayError as exc:
        out(f"Ошибка при отправке сообщения: {exc}")
        return
    out(f"Сообщение отправлено, ID: {response.message_id}, Timestamp: {response.timestamp}")