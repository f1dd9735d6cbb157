"""The scribble blog: home, about, and article pages with a validated form.

``app`` is a ready-to-serve instance::

    scribble run scribble.blog:app
"""

from scribble.blog.app import create_app

app = create_app()

__all__ = ["app", "create_app"]
