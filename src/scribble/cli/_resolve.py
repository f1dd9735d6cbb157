"""App import resolution — resolves ``"module:attribute"`` strings to App instances.

Shared by ``scribble run`` and ``scribble routes``.
"""

import importlib

from scribble.app import App


def resolve_app(import_string: str) -> App:
    """Resolve an import string to a scribble App instance.

    Accepts ``"module:attribute"``. When the attribute is omitted it
    defaults to ``"app"``. A callable that is not an App (an app
    factory such as ``scribble.blog:create_app``) is called with no
    arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not an ``App``.
    """
    module_path, _, attr_name = import_string.partition(":")
    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name or "app")

    if callable(obj) and not isinstance(obj, App):
        obj = obj()

    if not isinstance(obj, App):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a scribble App"
        raise TypeError(msg)

    return obj
