"""Tests for the auth example."""

from stooge.testing import TestClient


async def _login(client: TestClient, password: str = "password"):
    return await client.post("/login", form={"user": "admin", "password": password})


class TestAuthApp:
    async def test_home_is_public(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/")
            assert response.status == 200
            assert response.text == "Public home page"

    async def test_secret_forbidden_without_session(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/secret")
            assert response.status == 403
            assert response.text == ""

    async def test_bad_credentials(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await _login(client, password="wrong")
            assert response.status == 401
            assert response.set_cookies == []

    async def test_login_unlocks_secret(self, example_app) -> None:
        async with TestClient(example_app) as client:
            login = await _login(client)
            assert login.status == 200
            assert login.text == "Welcome admin"

            response = await client.get("/secret", cookies=login.cookies)
            assert response.status == 200
            assert response.text == "Super secret."

    async def test_forged_session_rejected(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get(
                "/secret", cookies={"stooge_session": "eyJTdG9vZ2VTZXNzaW9uIjoic3VwZXJzZWNyZXQifQ"}
            )
            assert response.status == 403

    async def test_logout_drops_cookie(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.post("/logout")
            assert response.cookies == {"stooge_session": ""}
            assert "Max-Age=0" in response.set_cookies[0]
