"""
Generation module - turn retrieved movies into a grounded answer.

- assemble_context(): movies -> prompt text (pure)
- AnswerGenerator: prompt text + question -> answer
- OpenAIGeneration / MockGeneration: GenerationProvider implementations
"""

from movie_rag.generation.context import assemble_context, format_movie
from movie_rag.generation.generator import (
    SYSTEM_PROMPT,
    NO_ANSWER,
    build_user_prompt,
    OpenAIGeneration,
    MockGeneration,
    get_generation_provider,
    AnswerGenerator,
)

__all__ = [
    # Context
    "assemble_context",
    "format_movie",
    # Prompts
    "SYSTEM_PROMPT",
    "NO_ANSWER",
    "build_user_prompt",
    # Providers
    "OpenAIGeneration",
    "MockGeneration",
    "get_generation_provider",
    # Generator
    "AnswerGenerator",
]
