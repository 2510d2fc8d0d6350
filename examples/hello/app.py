"""Hello — the smallest stooge app.

Demonstrates a static route, a named path parameter, a wildcard segment,
and a POST hook that stamps every response with a header.

Run:
    python app.py
"""

from stooge import App, Request, Response, SetHeaderHandler, StaticHandler

app = App()

app.get("/hello", StaticHandler(200, "Hello stranger"))


@app.get("/hello/{name}")
def greet(request: Request, response: Response) -> None:
    response.set_body("Hello " + request.path_param("name"))


# Four segments: "", "hello", "anybody", and anything at all
app.get("/hello/anybody/*", StaticHandler(200, "Hello whoever you are"))

app.post_hook(SetHeaderHandler("X-Header", "Look ma' a header!"))


if __name__ == "__main__":
    app.run()
