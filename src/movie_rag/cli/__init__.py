"""
CLI module - unified command-line interface.

Provides entry points for:
- Asking questions (one-shot and interactive)
- Inspecting retrieval results
- Loading and vectorizing the movie catalogue
"""

from movie_rag.cli.commands import (
    main,
    run_ask_cli,
    run_search_cli,
    run_chat_cli,
    run_init_db_cli,
    run_load_cli,
    run_vectorize_cli,
)

__all__ = [
    "main",
    "run_ask_cli",
    "run_search_cli",
    "run_chat_cli",
    "run_init_db_cli",
    "run_load_cli",
    "run_vectorize_cli",
]
