"""
Movie model for the retrieval system.

Single responsibility: Define the structure of the documents
stored in movie stores.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np


@dataclass
class Review:
    """A single review attached to a movie."""
    reviewer: str
    rating: float
    review: str

    def to_dict(self) -> dict:
        return {"reviewer": self.reviewer, "rating": self.rating, "review": self.review}


@dataclass
class Movie:
    """
    A movie with an optional embedding for retrieval.

    The embedding is only present once the vectorization job has run,
    so every consumer must tolerate embedding=None.
    """
    id: str
    title: str
    description: str = ""
    genre: str = ""
    year: int = 0
    actors: list[str] = field(default_factory=list)
    reviews: list[Review] = field(default_factory=list)
    embedding: np.ndarray | None = None

    @property
    def has_embedding(self) -> bool:
        return self.embedding is not None and len(self.embedding) > 0

    def to_dict(self, include_embedding: bool = False) -> dict:
        """Convert to dictionary for serialization."""
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "genre": self.genre,
            "year": self.year,
            "actors": list(self.actors),
            "reviews": [r.to_dict() for r in self.reviews],
        }
        if include_embedding and self.embedding is not None:
            data["embedding"] = [float(x) for x in self.embedding]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Movie:
        """Build a Movie from a store row or JSON object."""
        embedding = data.get("embedding")
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            description=data.get("description") or "",
            genre=data.get("genre") or "",
            year=int(data.get("year") or 0),
            actors=list(data.get("actors") or []),
            reviews=[
                Review(
                    reviewer=r.get("reviewer", ""),
                    rating=float(r.get("rating", 0)),
                    review=r.get("review", ""),
                )
                for r in data.get("reviews") or []
            ],
            embedding=np.asarray(embedding, dtype=np.float32) if embedding is not None else None,
        )
