"""
Unit Tests for Retrieval Tiers

Each tier is tested on its own against an in-memory store:
- Native vector tier labels results and respects the limit
- Application vector tier ranks by cosine similarity, skipping foreign dimensions
- Keyword tier scores by weighted field matches with a stable tie-break
"""

from unittest.mock import patch

import numpy as np
import pytest

from movie_rag.core import Query, VectorSearchUnsupportedError
from movie_rag.retrieval.document import Movie, Review
from movie_rag.retrieval.seeds import get_sample_movies
from movie_rag.retrieval.store import InMemoryMovieStore
from movie_rag.retrieval.tiers import (
    ApplicationVectorTier,
    KeywordTier,
    KeywordWeights,
    NativeVectorTier,
    default_tiers,
    keyword_score,
)


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------


@pytest.fixture
def embedded_movies():
    """Hand-built 3-d embeddings; query [0.8, 0.6, 0] ranks Matrix > Star Wars > Inception."""
    return [
        Movie(id="1", title="Star Wars", embedding=np.array([1.0, 0.0, 0.0])),
        Movie(id="2", title="The Matrix", embedding=np.array([0.6, 0.8, 0.0])),
        Movie(id="3", title="Inception", embedding=np.array([0.0, 0.0, 1.0])),
        Movie(id="4", title="The Godfather"),
        Movie(id="5", title="Toy Story", embedding=np.array([0.8, 0.6, 0.0, 0.0])),
    ]


def query(text="q", embedding=(0.8, 0.6, 0.0)):
    return Query(text=text, embedding=np.array(embedding))


# ---------------------------------------------------------------------------
# NATIVE VECTOR TIER
# ---------------------------------------------------------------------------


class TestNativeVectorTier:
    """Test tier 1."""

    @pytest.mark.asyncio
    async def test_labels_results_with_tier_name(self, embedded_movies):
        tier = NativeVectorTier(InMemoryMovieStore(embedded_movies))

        results = await tier.attempt(query(), limit=2)

        assert [r.movie.id for r in results] == ["2", "1"]
        assert all(r.tier == "native_vector" for r in results)

    @pytest.mark.asyncio
    async def test_unsupported_propagates(self, embedded_movies):
        tier = NativeVectorTier(InMemoryMovieStore(embedded_movies, supports_vector_search=False))

        with pytest.raises(VectorSearchUnsupportedError):
            await tier.attempt(query(), limit=5)

    def test_runs_unconditionally(self):
        assert NativeVectorTier.only_after_failure is False


# ---------------------------------------------------------------------------
# APPLICATION VECTOR TIER
# ---------------------------------------------------------------------------


class TestApplicationVectorTier:
    """Test tier 2."""

    @pytest.mark.asyncio
    async def test_ranks_by_cosine_similarity(self, embedded_movies):
        tier = ApplicationVectorTier(InMemoryMovieStore(embedded_movies))

        results = await tier.attempt(query(), limit=5)

        assert [r.movie.title for r in results] == ["The Matrix", "Star Wars", "Inception"]
        assert [r.score for r in results] == pytest.approx([0.96, 0.8, 0.0])
        assert all(r.tier == "application_vector" for r in results)

    @pytest.mark.asyncio
    async def test_skips_movies_with_other_dimensions(self, embedded_movies):
        """Toy Story's 4-d vector would be a perfect match if it were compared."""
        tier = ApplicationVectorTier(InMemoryMovieStore(embedded_movies))

        results = await tier.attempt(query(), limit=5)

        assert "5" not in [r.movie.id for r in results]

    @pytest.mark.asyncio
    async def test_respects_limit(self, embedded_movies):
        tier = ApplicationVectorTier(InMemoryMovieStore(embedded_movies))

        results = await tier.attempt(query(), limit=1)

        assert [r.movie.id for r in results] == ["2"]

    @pytest.mark.asyncio
    async def test_no_embedded_movies_returns_empty(self):
        tier = ApplicationVectorTier(InMemoryMovieStore(get_sample_movies()))

        assert await tier.attempt(query(), limit=5) == []

    def test_only_runs_after_failure(self):
        assert ApplicationVectorTier.only_after_failure is True


# ---------------------------------------------------------------------------
# KEYWORD SCORING
# ---------------------------------------------------------------------------


class TestKeywordScore:
    """Test the pure keyword_score function."""

    @pytest.fixture
    def movie(self):
        return Movie(
            id="1",
            title="Star Wars",
            description="A space adventure in a galaxy far, far away.",
            genre="Sci-Fi",
            year=1977,
            actors=["Mark Hamill", "Harrison Ford"],
            reviews=[Review(reviewer="Critic", rating=5, review="Classic!")],
        )

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("star wars", 10.0),
            ("harrison", 7.0),
            ("galaxy", 5.0),
            ("sci-fi", 3.0),
            ("classic", 2.0),
            ("godfather", 0.0),
        ],
    )
    def test_field_weights(self, movie, text, expected):
        assert keyword_score(movie, text) == expected

    def test_case_insensitive(self, movie):
        assert keyword_score(movie, "STAR WARS") == keyword_score(movie, "star wars")

    def test_matches_accumulate(self):
        movie = Movie(id="1", title="Space Jam", description="Basketball in space", genre="Space")
        assert keyword_score(movie, "space") == 10.0 + 5.0 + 3.0

    def test_each_list_field_counts_once(self):
        movie = Movie(id="1", title="X", actors=["Tom Hanks", "Tom Hardy"])
        assert keyword_score(movie, "tom") == 7.0

    @pytest.mark.parametrize("text", ["", "   ", "\n"])
    def test_blank_query_scores_zero(self, movie, text):
        assert keyword_score(movie, text) == 0.0

    def test_whole_query_is_one_substring(self, movie):
        """Words are not matched independently."""
        assert keyword_score(movie, "wars star") == 0.0

    def test_custom_weights(self, movie):
        weights = KeywordWeights(title=1.0)
        assert keyword_score(movie, "star wars", weights) == 1.0


class TestKeywordWeights:
    """Test KeywordWeights configuration."""

    def test_defaults(self):
        weights = KeywordWeights()
        assert (weights.title, weights.actors, weights.description, weights.genre, weights.review) == (
            10.0, 7.0, 5.0, 3.0, 2.0,
        )

    def test_from_env_overrides(self):
        with patch.dict("os.environ", {"KEYWORD_WEIGHT_TITLE": "20", "KEYWORD_WEIGHT_REVIEW": "0.5"}):
            weights = KeywordWeights.from_env()

        assert weights.title == 20.0
        assert weights.review == 0.5
        assert weights.actors == 7.0


# ---------------------------------------------------------------------------
# KEYWORD TIER
# ---------------------------------------------------------------------------


class TestKeywordTier:
    """Test tier 3."""

    @pytest.mark.asyncio
    async def test_space_adventure_finds_star_wars_first(self):
        tier = KeywordTier(InMemoryMovieStore(get_sample_movies()))

        results = await tier.attempt(query("space adventure"), limit=5)

        assert results[0].movie.title == "Star Wars"
        assert results[0].score == 5.0
        assert results[0].tier == "keyword"

    @pytest.mark.asyncio
    async def test_space_adventure_ignores_other_sci_fi(self):
        movies = get_sample_movies()[:3]
        tier = KeywordTier(InMemoryMovieStore(movies))

        results = await tier.attempt(query("space adventure"), limit=5)

        assert [r.movie.title for r in results] == ["Star Wars"]
        assert keyword_score(movies[1], "space adventure") == 0
        assert keyword_score(movies[2], "space adventure") == 0

    @pytest.mark.asyncio
    async def test_drops_zero_scores(self):
        tier = KeywordTier(InMemoryMovieStore(get_sample_movies()))

        results = await tier.attempt(query("keanu"), limit=5)

        assert [r.movie.title for r in results] == ["The Matrix"]

    @pytest.mark.asyncio
    async def test_ties_keep_store_order(self):
        movies = [
            Movie(id="b", title="Heat", genre="Crime"),
            Movie(id="a", title="Goodfellas", genre="Crime"),
            Movie(id="c", title="Casino", genre="Crime"),
        ]
        tier = KeywordTier(InMemoryMovieStore(movies))

        results = await tier.attempt(query("crime"), limit=5)

        assert [r.movie.id for r in results] == ["b", "a", "c"]

    @pytest.mark.asyncio
    async def test_respects_limit(self):
        tier = KeywordTier(InMemoryMovieStore(get_sample_movies()))

        results = await tier.attempt(query("sci-fi"), limit=2)

        assert len(results) == 2

    @pytest.mark.asyncio
    async def test_no_match_returns_empty(self):
        tier = KeywordTier(InMemoryMovieStore(get_sample_movies()))

        assert await tier.attempt(query("zzzz"), limit=5) == []


class TestDefaultTiers:
    """Test the standard chain."""

    def test_order(self):
        tiers = default_tiers(InMemoryMovieStore())
        assert [t.name for t in tiers] == ["native_vector", "application_vector", "keyword"]

    def test_passes_weights_to_keyword_tier(self):
        weights = KeywordWeights(title=1.0)
        tiers = default_tiers(InMemoryMovieStore(), weights)
        assert tiers[-1].weights is weights
