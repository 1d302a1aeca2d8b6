# Services package init
"""
Noteful Backend — Services Layer
=================================

What:  Everything between the routes (HTTP) and the ORM models (tables).

Inventory:
    - validation:   Pure request-body checks (required fields, types)
    - sanitizer:    bleach-based XSS neutralization for user text
    - BaseStore:    Transaction scope + SQLAlchemy error translation
    - FolderStore:  Folder persistence, including the cascade on delete
    - NoteStore:    Note persistence; stamps `modified` on create/update

Stores receive a `Database` in their constructor, so tests can hand them
an in-memory SQLite database and routes never touch a global engine.
"""
