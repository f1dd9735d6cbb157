"""Blog application factory."""

from dataclasses import replace
from pathlib import Path

from scribble.app import App
from scribble.blog import handlers
from scribble.config import AppConfig
from scribble.middleware.builtin import ForceHTMLMiddleware, TrailingSlashMiddleware

TEMPLATES_DIR = Path(__file__).parent / "templates"


def create_app(config: AppConfig | None = None) -> App:
    """Build the blog app.

    Route order matters: ``/articles/{id:[0-9]+}`` is tried before
    ``/articles/create``, which it never matches since ``create`` is not
    all digits. Without an explicit ``template_dir`` the packaged
    templates are used.
    """
    if config is None:
        config = AppConfig(template_dir=TEMPLATES_DIR)
    elif config.template_dir == AppConfig().template_dir:
        config = replace(config, template_dir=TEMPLATES_DIR)

    app = App(config=config)

    app.route("/", name="home")(handlers.home)
    app.route("/about", name="about")(handlers.about)
    app.route("/articles/{id:[0-9]+}", name="articles.show")(handlers.show)
    app.route("/articles", name="articles.index")(handlers.index)
    app.route("/articles", methods=["POST"], name="articles.store")(handlers.store)
    app.route("/articles/create", name="articles.create")(handlers.create)

    app.error(404)(handlers.not_found)

    app.add_middleware(ForceHTMLMiddleware())
    app.add_middleware(TrailingSlashMiddleware())

    return app
