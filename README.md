# messenger-cli

An interactive terminal client for a messenger service that sits behind an
HTTP API gateway. From a simple menu you can register users, find out your
user ID, search for users, open dialogs, send messages and read a dialog's
history. Prompts and messages are in Russian.

## Installation

```
pip install .
```

## Usage

Start the menu:

```
messenger-cli
```

The command takes no options apart from `--help`. It talks to a gateway at
`http://localhost:8080`. The menu lists its actions by number; type a number
or the full text of an action:

- **Создать пользователя**: register a user (login, password, first and last name, e-mail, phone) and print the new user's ID.
- **Узнать свой ID**: log in with login and password and print your user ID.
- **Получить пользователей**: search users by any combination of login, first name, last name, e-mail and phone. Leave a filter empty to skip it; at least one is required.
- **Создать диалог**: create a named dialog between you and a peer.
- **Получить список диалогов**: list a user's dialogs; you are asked (y/N) whether to give a limit and an offset.
- **Отправить сообщение**: send a text message to a dialog.
- **Получить сообщения диалога**: read a dialog's messages; the limit and offset may be left empty.
- **Выход**: quit.

Errors from the gateway are printed and the menu is shown again. End of
input or Ctrl-C leaves the program with exit status 1.

## Using it as a library

The HTTP clients can be used on their own:

```python
from messenger_cli.dialogs import DialogClient
from messenger_cli.models import SendMessageRequest

client = DialogClient("http://localhost:8080")
reply = client.send_message(SendMessageRequest(dialog_id=1, user_id=2, text="hello"))
print(reply.message_id, reply.timestamp)
```

- `messenger_cli.users.UserClient` offers `create_user`, `get_users` and `login`.
- `messenger_cli.dialogs.DialogClient` offers `create_dialog`, `get_user_dialogs`,
  `send_message` and `get_dialog_messages`.
- Both derive from `messenger_cli.gateway.GatewayClient(base_url, timeout=5.0, session=None)`,
  which can also be given a ready `requests.Session`.
- Request and reply records live in `messenger_cli.models`.

When a request fails, the gateway answers with a status other than 200, or a
reply cannot be parsed, these methods raise `messenger_cli.gateway.GatewayError`
(its `status_code` holds the HTTP status where there was one).
`UserClient.get_users` raises `ValueError` when every filter is empty.

To run the menu against another gateway, or with your own input and output
functions, call `messenger_cli.menu.run(api_url=..., ask=..., confirm=..., choose=..., out=...)`.

## What it does not do

It is only a client: it has no server and stores nothing locally. It keeps
no login session between actions, so user IDs are typed in by hand, and there
is no live delivery of new messages; a dialog's messages are fetched when you
ask for them.

## Running the tests

```
pip install .[test]
pytest
```