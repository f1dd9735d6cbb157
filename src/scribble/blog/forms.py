"""Article form: validation rules, render data, and the form template binding."""

from dataclasses import dataclass, field

from scribble.templating.returns import Template
from scribble.validation import ValidationResult, length_between, min_length, required, validate

TITLE_MIN = 3
TITLE_MAX = 40
BODY_MIN = 10

ARTICLE_RULES = {
    "title": [
        required("title must not be empty"),
        length_between(
            TITLE_MIN,
            TITLE_MAX,
            f"title length must be between {TITLE_MIN} and {TITLE_MAX} characters",
        ),
    ],
    "body": [
        required("body must not be empty"),
        min_length(BODY_MIN, f"body length must be at least {BODY_MIN} characters"),
    ],
}


def validate_article(title: str, body: str) -> ValidationResult:
    """Check a submitted article. Lengths count characters, not bytes.

    Each field reports at most one message; an empty field never also
    reports a length message.
    """
    return validate({"title": title, "body": body}, ARTICLE_RULES)


@dataclass(frozen=True, slots=True)
class ArticleFormData:
    """Everything the article form needs to (re)display itself."""

    title: str = ""
    body: str = ""
    action: str = ""
    errors: dict[str, str] = field(default_factory=dict)


def render_article_form(data: ArticleFormData) -> Template:
    """Bind *data* to the article form template.

    Submitted values are echoed verbatim; the template escapes them.
    """
    return Template(
        "articles/form.html",
        title=data.title,
        body=data.body,
        action=data.action,
        errors=data.errors,
    )
