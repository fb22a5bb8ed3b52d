"""todo-companion: console to-do list mirrored to a demo REST API."""

__version__ = "0.1.0"
