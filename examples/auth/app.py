"""Auth — a protected page guarded by a PRE hook.

The guard hook answers 403 for ``/secret`` unless the signed session
says the visitor logged in, and neutralizes the matched route with a
sticky ``PassHandler`` so the secret page never renders.

Demonstrates:
- PRE hooks and ``set_sticky_handler``
- signed session cookies minted with ``SessionReader.dumps``
- form bodies via ``Request.parsed_body()``
- ``Cookie.drop`` for logout

Run:
    python app.py
"""

from stooge import App, AppConfig, Cookie, PassHandler, Request, Response, StaticHandler
from stooge.server.sessions import SessionReader

SESSION_KEY = "StoogeSession"
SESSION_VALUE = "supersecret"

# Hardcoded demo credentials
USERS: dict[str, str] = {"admin": "password"}

config = AppConfig(secret_key="change-me-in-production")
app = App(config=config)
sessions = SessionReader(config)


@app.pre_hook
def guard(request: Request, response: Response) -> None:
    """Forbid /secret to anyone without the session marker."""
    if not request.path_starts_with("/secret"):
        return
    if request.session_param(SESSION_KEY) != SESSION_VALUE:
        response.set_status(403)
        request.set_sticky_handler(PassHandler())


app.get("/", StaticHandler(200, "Public home page"))
app.get("/secret", StaticHandler(200, "Super secret."))


@app.post("/login")
def login(request: Request, response: Response) -> None:
    fields = request.parsed_body()
    user = fields.get("user", "")
    if USERS.get(user) != fields.get("password"):
        response.set_status(401).set_body("Invalid credentials")
        return

    token = sessions.dumps({SESSION_KEY: SESSION_VALUE, "user": user})
    response.set_cookie(Cookie(sessions.cookie_name, token, config.session_max_age))
    response.set_body(f"Welcome {user}")


@app.post("/logout")
def logout(request: Request, response: Response) -> None:
    response.set_cookie(Cookie.drop(sessions.cookie_name))
    response.set_body("Bye")


if __name__ == "__main__":
    app.run()
