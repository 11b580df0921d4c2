from .conftest import bearer


def _login(client, account):
    response = client.post("/auth/login", json={"email": account["email"], "password": account["password"]})
    assert response.status_code == 200
    return response.json()["data"]["accessToken"]


def _new_org(client, token, name="Team"):
    response = client.post("/api/organisations", json={"name": name}, headers=bearer(token))
    return response.json()["data"]["orgId"]


def _add(client, token, org_id, user_id):
    response = client.post(f"/api/organisations/{org_id}/users", json={"userId": user_id}, headers=bearer(token))
    assert response.status_code == 200


def test_user_can_read_own_profile(client, register_user):
    account = register_user(first_name="Self", last_name="Reader", phone="+1234567890")

    response = client.get(f"/api/users/{account['id']}", headers=bearer(account["token"]))
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["message"] == "User retrieved successfully"
    assert body["data"] == {
        "userId": account["id"],
        "firstName": "Self",
        "lastName": "Reader",
        "email": account["email"],
        "phone": "+1234567890",
    }


def test_unrelated_user_is_forbidden(client, register_user):
    a = register_user(first_name="Alice")
    b = register_user(first_name="Bob")

    response = client.get(f"/api/users/{b['id']}", headers=bearer(a["token"]))
    assert response.status_code == 403
    assert response.json()["message"] == "Forbidden"


def test_creator_can_read_member_of_created_org(client, register_user):
    a = register_user(first_name="Alice")
    b = register_user(first_name="Bob")
    org_id = _new_org(client, a["token"])
    _add(client, a["token"], org_id, b["id"])

    # Alice is not a member of the new org, only its creator
    response = client.get(f"/api/users/{b['id']}", headers=bearer(a["token"]))
    assert response.status_code == 200
    assert response.json()["data"]["firstName"] == "Bob"


def test_peers_sharing_an_org_can_read_each_other(client, register_user):
    a = register_user(first_name="Alice")
    b = register_user(first_name="Bob")
    c = register_user(first_name="Carol")
    org_id = _new_org(client, c["token"])
    _add(client, c["token"], org_id, a["id"])
    _add(client, c["token"], org_id, b["id"])

    a_token = _login(client, a)
    b_token = _login(client, b)

    assert client.get(f"/api/users/{b['id']}", headers=bearer(a_token)).status_code == 200
    assert client.get(f"/api/users/{a['id']}", headers=bearer(b_token)).status_code == 200


def test_member_cannot_read_creator_who_is_not_member(client, register_user):
    a = register_user(first_name="Alice")
    b = register_user(first_name="Bob")
    org_id = _new_org(client, a["token"])
    _add(client, a["token"], org_id, b["id"])

    b_token = _login(client, b)
    response = client.get(f"/api/users/{a['id']}", headers=bearer(b_token))
    assert response.status_code == 403


def test_unknown_user_is_not_found(client, register_user):
    a = register_user()

    response = client.get("/api/users/does-not-exist", headers=bearer(a["token"]))
    assert response.status_code == 404
    assert response.json()["message"] == "User not found"


def test_profile_requires_auth(client, register_user):
    a = register_user()
    assert client.get(f"/api/users/{a['id']}").status_code == 401
