"""
GameHub application package.

Layered architecture:

  gamehub/repositories/   pure I/O: loading collections from and persisting
                           them to the JSON store.
  gamehub/services/       business logic: validation, ownership rules,
                           cascades and derived counters.

``gamehub_server.py`` is the integration point: ``create_app`` builds one
store, wires repositories into services and exposes them on
``app.extensions['gamehub']`` so route handlers stay thin.
"""

__version__ = '1.0.0'
