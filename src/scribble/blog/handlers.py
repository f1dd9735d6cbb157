"""Blog route handlers.

Plain functions; ``create_app`` registers them. Handlers that build
URLs declare ``router: Router`` and have the app's router injected.
"""

from scribble.blog.forms import ArticleFormData, render_article_form, validate_article
from scribble.errors import UnsupportedFormEncoding
from scribble.http.request import Request
from scribble.routing.router import Router
from scribble.templating.returns import Template

NOT_FOUND_HTML = "<h1>请求页面未找到 :(</h1><p>如有疑惑，请联系我们。</p>"


def home() -> str:
    return "<h1>Hello, 欢迎来到 scribble!</h1>"


def about() -> str:
    return (
        "此博客是用以记录编程笔记，如您有反馈或建议，请联系 "
        '<a href="mailto:summer@example.com">summer@example.com</a>'
    )


def show(id: str) -> str:
    return f"文章ID: {id}"


def index() -> str:
    return "访问文章列表"


def create(router: Router) -> Template:
    """Show an empty article form."""
    return render_article_form(ArticleFormData(action=router.url_for("articles.store")))


async def store(request: Request, router: Router) -> Template:
    """Validate a submitted article and either confirm it or redisplay the form.

    Nothing is stored. Missing fields, or a body that is not form-encoded,
    count as empty.
    """
    try:
        form = await request.form()
    except UnsupportedFormEncoding:
        # Every field is missing
        form = {}
    title = form.get("title", "")
    body = form.get("body", "")

    result = validate_article(title, body)
    if not result:
        return render_article_form(
            ArticleFormData(
                title=title,
                body=body,
                action=router.url_for("articles.store"),
                errors=result.errors,
            )
        )

    return Template(
        "articles/accepted.html",
        title=title,
        title_length=_byte_length(title),
        body=body,
        body_length=_byte_length(body),
    )


def _byte_length(value: str) -> int:
    return len(value.encode("utf-8"))


def not_found() -> str:
    return NOT_FOUND_HTML
