"""Locate the App behind a ``"module:attribute"`` string."""

import importlib

from stooge.app import App


def resolve_app(import_string: str) -> App:
    """Import *import_string* and return the stooge App it names.

    ``"pkg.module:name"`` looks up ``name``; a bare ``"pkg.module"`` looks
    up ``app``. If the attribute is a factory rather than an App, it is
    called with no arguments.

    Raises:
        ModuleNotFoundError: The module does not exist.
        AttributeError: The module has no such attribute.
        TypeError: The factory failed, or the result is not an App.
    """
    module_path, _, attr_name = import_string.partition(":")
    target = getattr(importlib.import_module(module_path), attr_name or "app")

    # An App is itself callable (ASGI), so check the type first
    if not isinstance(target, App) and callable(target):
        try:
            target = target()
        except Exception as exc:
            msg = f"App factory {import_string!r} failed: {exc}"
            raise TypeError(msg) from exc

    if isinstance(target, App):
        return target

    msg = f"{import_string!r} resolved to {type(target).__name__}, not a stooge.App instance"
    raise TypeError(msg)
