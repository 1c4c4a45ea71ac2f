"""Hello — the three request stages and the session cookie.

Two pre-routing chunks log and count visits in the session, two routes
answer, a post-routing chunk logs, and the fallback route answers
everything else.

Run:
    python app.py
"""

import logging

from wren import App, AppConfig, CookieOptions, SessionCookieConfig
from wren.http.content import CONTENT_HEADERS

logger = logging.getLogger("hello")

app = App(
    AppConfig(
        cookies=CookieOptions(keys=("notasecret", "1234567890", "abcdefghij")),
        session_cookie=SessionCookieConfig(name="APPSERVER", signed=True),
    )
)


async def log_request(ctx):
    logger.info("pre-routing: %s %s", ctx.req.method, ctx.url.path)


async def count_visits(ctx):
    ctx.session["visits"] = ctx.session.get("visits", 0) + 1


async def log_done(ctx):
    logger.info("post-routing: %s", ctx.url.path)


app.use("pre_routing", log_request)
app.use("pre_routing", count_visits)


@app.route("/")
async def index(ctx):
    await ctx.send(200, "landing page")


@app.route("/home")
async def home(ctx):
    await ctx.send(200, "<h1>home page</h1>", CONTENT_HEADERS["html"])


@app.route("/visits")
async def visits(ctx):
    await ctx.send_json(200, {"visits": ctx.session["visits"]})


@app.route("/old-home")
async def old_home(ctx):
    await ctx.redirect(301, "/home")


@app.route("*")
async def fallback(ctx):
    await ctx.send(404, f"Nothing at {ctx.url.path}")


app.use("post_routing", log_done)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.listen(3500, lambda: logger.info("server is listening..."))
