"""todo-api: todo CRUD and user sessions over a small Flask REST API."""

__version__ = "0.1.0"
