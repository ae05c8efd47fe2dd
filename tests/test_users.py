import json

import pytest
import responses

from messenger_cli.gateway import GatewayError
from messenger_cli.models import CreateUserRequest, LoginRequest
from messenger_cli.users import (
    SUCCESS_PREFIX,
    UserClient,
    create_user_case,
    extract_id_from_success_message,
    get_users_case,
    login_case,
)

BASE = "http://localhost:8080"


def scripted(answers):
    it = iter(answers)
    prompts = []

    def ask(prompt):
        prompts.append(prompt)
        return next(it)

    return ask, prompts


@pytest.fixture
def client():
    return UserClient(BASE)


@pytest.fixture
def output():
    lines = []
    return lines


# extract_id_from_success_message


def test_extract_id_ok():
    assert extract_id_from_success_message(SUCCESS_PREFIX + "42") == 42


def test_extract_id_signed():
    assert extract_id_from_success_message(SUCCESS_PREFIX + "-7") == -7
    assert extract_id_from_success_message(SUCCESS_PREFIX + "+7") == 7


def test_extract_id_wrong_prefix():
    with pytest.raises(ValueError, match="неверный формат сообщения"):
        extract_id_from_success_message("created 42")


@pytest.mark.parametrize("tail", ["", "abc", " 42", "4_2", "42 "])
def test_extract_id_not_a_number(tail):
    with pytest.raises(ValueError, match="не удалось преобразовать ID в число"):
        extract_id_from_success_message(SUCCESS_PREFIX + tail)


def test_extract_id_int64_bounds():
    top = 2**63 - 1
    assert extract_id_from_success_message(SUCCESS_PREFIX + str(top)) == top
    with pytest.raises(ValueError, match="не удалось преобразовать ID в число"):
        extract_id_from_success_message(SUCCESS_PREFIX + str(top + 1))


# UserClient.create_user


def test_create_user_sends_body_and_returns_id(client):
    password = "password"
    request = CreateUserRequest(
        login="bob",
        first_name="Bob",
        last_name="Stone",
        email="bob@example.com",
        phone="",
        password=password,
    )
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.POST,
            f"{BASE}/users/create",
            json={"success": SUCCESS_PREFIX + "17"},
        )
        result = client.create_user(request)
        sent = rsps.calls[0].request
        assert json.loads(sent.body) == request.to_dict()
        assert sent.headers["Content-Type"] == "application/json"
    assert result.id == 17
    assert result.success == SUCCESS_PREFIX + "17"


def test_create_user_bad_message(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, f"{BASE}/users/create", json={"success": "ok"})
        with pytest.raises(GatewayError, match="не удалось извлечь ID из ответа"):
            client.create_user(CreateUserRequest(login="bob"))


def test_create_user_success_not_string(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, f"{BASE}/users/create", json={"success": 3})
        with pytest.raises(GatewayError, match="не удалось распарсить ответ"):
            client.create_user(CreateUserRequest(login="bob"))


def test_create_user_status_error(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, f"{BASE}/users/create", status=500)
        with pytest.raises(GatewayError) as info:
            client.create_user(CreateUserRequest(login="bob"))
    assert info.value.status_code == 500
    assert str(info.value) == "API Gateway вернул статус 500"


# UserClient.get_users


def test_get_users_requires_a_filter(client):
    with pytest.raises(ValueError, match="нужно указать хотя бы один параметр"):
        client.get_users({"login": "", "email": ""})


def test_get_users_drops_empty_and_sorts_query(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, f"{BASE}/users/get", json={"users": []})
        result = client.get_users(
            {"login": "bob", "phone": "", "email": "bob@example.com"}
        )
        url = rsps.calls[0].request.url
    assert result == []
    assert url == f"{BASE}/users/get?email=bob%40example.com&login=bob"


def test_get_users_parses_users(client):
    users = [
        {"login": "bob", "first_name": "Bob", "last_name": "Stone",
         "email": "bob@example.com", "phone": ""},
        {"login": "amy", "email": "amy@example.com"},
    ]
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, f"{BASE}/users/get", json={"users": users})
        result = client.get_users({"login": "b"})
    assert [u.login for u in result] == ["bob", "amy"]
    assert result[0] == CreateUserRequest.from_dict(users[0])
    assert result[1].first_name == ""


def test_get_users_null_reply_is_empty(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, f"{BASE}/users/get", body="null")
        assert client.get_users({"login": "bob"}) == []


def test_get_users_bad_shape(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, f"{BASE}/users/get", json={"users": "nope"})
        with pytest.raises(GatewayError, match="не удалось распарсить ответ"):
            client.get_users({"login": "bob"})


# UserClient.login


def test_login_returns_user_id(client):
    password = "password"
    request = LoginRequest(login="bob", password=password)
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.POST,
            f"{BASE}/users/login",
            json={"message": "ok", "user_id": 9},
        )
        result = client.login(request)
        assert json.loads(rsps.calls[0].request.body) == request.to_dict()
    assert result.user_id == 9
    assert result.message == "ok"


def test_login_status_error(client):
    password = "password"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, f"{BASE}/users/login", status=401)
        with pytest.raises(GatewayError) as info:
            client.login(LoginRequest(login="bob", password=password))
    assert info.value.status_code == 401


# interactive cases


def test_create_user_case_prints_id(client, output):
    ask, prompts = scripted(
        ["bob", "password", "Bob", "Stone", "bob@example.com", ""]
    )
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.POST,
            f"{BASE}/users/create",
            json={"success": SUCCESS_PREFIX + "5"},
        )
        create_user_case(client, ask, output.append)
        body = json.loads(rsps.calls[0].request.body)
    assert body["login"] == "bob"
    assert body["password"] == "password"
    assert body["email"] == "bob@example.com"
    assert len(prompts) == 6
    assert output == ["Пользователь успешно создан, ID: 5"]


def test_create_user_case_reports_error(client, output):
    ask, _ = scripted(["bob", "password", "", "", "", ""])
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, f"{BASE}/users/create", status=400)
        create_user_case(client, ask, output.append)
    assert output == [
        "Ошибка при создании пользователя: API Gateway вернул статус 400"
    ]


def test_get_users_case_without_filters(client, output):
    ask, prompts = scripted(["", "", "", "", ""])
    get_users_case(client, ask, output.append)
    assert len(prompts) == 5
    assert output == ["Нужно указать хотя бы один параметр фильтра."]


def test_get_users_case_lists_users(client, output):
    ask, _ = scripted(["", "Bob", "", "", ""])
    user = {"login": "bob", "first_name": "Bob", "last_name": "Stone",
            "email": "bob@example.com", "phone": "1"}
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, f"{BASE}/users/get", json={"users": [user]})
        get_users_case(client, ask, output.append)
        url = rsps.calls[0].request.url
    assert url == f"{BASE}/users/get?first_name=Bob"
    assert output == [
        "Пользователи:",
        "Login: bob, Email: bob@example.com, Имя: Bob Stone, Телефон: 1",
    ]


def test_login_case_prints_id(client, output):
    ask, _ = scripted(["bob", "password"])
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, f"{BASE}/users/login", json={"user_id": 12})
        login_case(client, ask, output.append)
    assert output == ["Ваш ID 12"]


def test_login_case_reports_error(client, output):
    ask, _ = scripted(["bob", "password"])
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, f"{BASE}/users/login", status=403)
        login_case(client, ask, output.append)
    assert output == ["Ошибка при входе: API Gateway вернул статус 403"]