from urllib.parse import urlparse

from campus_auth.interfaces.http.deps import get_token_issuer
from conftest import png_file, register_form


def test_register_then_login_flow(client, db_session):
    """Registration followed by login with right and wrong passwords."""
    from campus_auth.infrastructure.models import StudentORM

    # 1. Register
    register_response = client.post(
        "/register",
        data=register_form(nombre="Ana", apellido="Lopez", email="ana@x.com",
                           **{"contraseña": "secret1"}, tipoUsuario="student"),
        files=png_file(),
    )
    assert register_response.status_code == 201
    body = register_response.json()
    claims = get_token_issuer().verify(body["token"])
    row = db_session.get(StudentORM, claims["id"])
    assert row is not None
    assert row.email == "ana@x.com"
    assert body["user"]["id"] == row.id
    parsed = urlparse(body["imageUrl"])
    assert parsed.scheme == "https"
    assert parsed.netloc

    # 2. Login with the right password
    login_response = client.post("/login", json={"usuario": "ana@x.com", "contraseña": "secret1"})
    assert login_response.status_code == 200
    assert login_response.json()["usuario"] == "Ana"
    assert login_response.cookies.get("access_token")
    assert get_token_issuer().verify(login_response.json()["token"])["id"] == row.id

    # 3. Login with a wrong password
    wrong_response = client.post("/login", json={"usuario": "ana@x.com", "contraseña": "wrong"})
    assert wrong_response.status_code == 401


def test_same_email_in_both_tables_logs_in_as_student(client):
    student = client.post("/register", data=register_form(), files=png_file()).json()
    teacher = client.post(
        "/register",
        data=register_form(tipoUsuario="teacher", **{"contraseña": "other-secret"}),
        files=png_file(),
    ).json()
    assert student["user"]["tipoUsuario"] == "student"
    assert teacher["user"]["tipoUsuario"] == "teacher"

    ok = client.post("/login", json={"usuario": "ana@x.com", "contraseña": "secret1"})
    assert ok.status_code == 200
    assert get_token_issuer().verify(ok.json()["token"])["id"] == student["user"]["id"]

    # the teacher password is checked against the student row
    shadowed = client.post("/login", json={"usuario": "ana@x.com", "contraseña": "other-secret"})
    assert shadowed.status_code == 401


def test_several_students_get_distinct_ids(client):
    ids = []
    for i in range(3):
        response = client.post(
            "/register",
            data=register_form(email=f"user{i}@x.com", nombre=f"User{i}"),
            files=png_file(),
        )
        assert response.status_code == 201
        ids.append(response.json()["user"]["id"])

    assert len(set(ids)) == 3
    for i, identity_id in enumerate(ids):
        response = client.post("/login", json={"usuario": f"user{i}@x.com", "contraseña": "secret1"})
        assert response.json()["usuario"] == f"User{i}"
        assert get_token_issuer().verify(response.json()["token"])["id"] == identity_id
