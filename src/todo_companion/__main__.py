# src/todo_companion/__main__.py

from .cli.main import main

main()
