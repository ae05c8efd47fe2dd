"""Interactive main menu of the messenger client."""

from __future__ import annotations

import argparse
from typing import Any, Callable, Sequence

from messenger_cli.dialogs import (
    DialogClient,
    create_dialog_case,
    get_dialog_messages_case,
    get_user_dialogs_case,
    send_message_case,
)
from messenger_cli.users import UserClient, create_user_case, get_users_case, login_case

API_URL = "http://localhost:8080"
PROMPT = "Выберите действие:"

CREATE_USER = "Создать пользователя"
LOGIN = "Узнать свой ID"
GET_USERS = "Получить пользователей"
CREATE_DIALOG = "Создать диалог"
USER_DIALOGS = "Получить список диалогов"
SEND_MESSAGE = "Отправить сообщение"
DIALOG_MESSAGES = "Получить сообщения диалога"
EXIT = "Выход"

OPTIONS = (
    CREATE_USER,
    LOGIN,
    GET_USERS,
    CREATE_DIALOG,
    USER_DIALOGS,
    SEND_MESSAGE,
    DIALOG_MESSAGES,
    EXIT,
)

Choose = Callable[[str, Sequence[str]], str]


def _choose(message: str, options: Sequence[str]) -> str:
    print(message)
    for number, option in enumerate(options, 1):
        print(f"  {number}) {option}")
    while True:
        answer = input("> ").strip()
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            return options[int(answer) - 1]
        if answer in options:
            return answer
        print("Выберите пункт из списка.")


def run(
    api_url: str = API_URL,
    ask: Callable[[str], str] | None = None,
    confirm: Callable[[str, bool], bool] | None = None,
    choose: Choose | None = None,
    out: Callable[[str], Any] = print,
) -> None:
    """Show the menu repeatedly and run the chosen action until the user exits."""
    ask = ask if ask is not None else input
    choose = choose if choose is not None else _choose
    users = UserClient(api_url)
    dialogs = DialogClient(api_url)

    actions: dict[str, Callable[[], None]] = {
        CREATE_USER: lambda: create_user_case(users, ask, out),
        LOGIN: lambda: login_case(users, ask, out),
        GET_USERS: lambda: get_users_case(users, ask, out),
        CREATE_DIALOG: lambda: create_dialog_case(dialogs, ask, out),
        USER_DIALOGS: lambda: get_user_dialogs_case(dialogs, ask, confirm, out),
        SEND_MESSAGE: lambda: send_message_case(dialogs, ask, out),
        DIALOG_MESSAGES: lambda: get_dialog_messages_case(dialogs, ask, out),
    }

    while True:
        choice = choose(PROMPT, OPTIONS)
        if choice == EXIT:
            out("Выход.")
            return
        action = actions.get(choice)
        if action is not None:
            action()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the interactive client."""
    parser = argparse.ArgumentParser(
        prog="messenger-cli",
        description="Interactive client for the messenger API gateway.",
    )
    parser.parse_args(argv)
    try:
        run()
    except (EOFError, KeyboardInterrupt):
        print()
        return 1
    return 0