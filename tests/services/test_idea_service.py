"""Tests for idea creation, detail reads and the paginated listing."""

from datetime import UTC, datetime, timedelta

import pytest

from ideaboard.core.errors import InvalidReferenceError, ValidationError
from ideaboard.schemas.idea import IdeaCreate, IdeaSort
from ideaboard.services import idea_service

MISSING_ID = "0f8fad5b-d9cb-469f-a165-70867728950e"
BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def _titles(response) -> list[str]:
    return [entry.title for entry in response.ideas]


def test_create_idea_trims_and_stores(db_session, author) -> None:
    created = idea_service.create_idea(
        db_session,
        author.id,
        IdeaCreate(title="  Community garden  ", description="  Grow food together  "),
    )

    assert created.title == "Community garden"
    assert created.description == "Grow food together"
    assert created.user_id == author.id
    assert created.created_at == created.updated_at


def test_create_idea_rejects_short_title(db_session, author) -> None:
    with pytest.raises(ValidationError) as exc_info:
        idea_service.create_idea(
            db_session, author.id, IdeaCreate(title="abc", description="Long enough text")
        )
    assert exc_info.value.details[0]["field"] == "title"


def test_create_idea_for_unknown_author(db_session) -> None:
    with pytest.raises(InvalidReferenceError):
        idea_service.create_idea(
            db_session, MISSING_ID, IdeaCreate(title="Orphan idea", description="Nobody wrote it")
        )


def test_new_idea_appears_unrated_in_listing(db_session, author) -> None:
    created = idea_service.create_idea(
        db_session, author.id, IdeaCreate(title="Fresh idea", description="Brand new idea here")
    )

    listing = idea_service.get_ideas(db_session)

    assert listing.total_count == 1
    entry = listing.ideas[0]
    assert entry.id == created.id
    assert entry.average_rating is None
    assert entry.rating_count == 0
    assert entry.feedback_count == 0
    assert entry.author.username == author.username


def test_get_idea_by_id_includes_feedback_newest_first(
    db_session, idea, reviewer, make_user, rate, leave_feedback
) -> None:
    rate(reviewer, idea, 4)
    older = leave_feedback(reviewer, idea, "The older feedback entry", BASE_TIME)
    newer = leave_feedback(
        make_user(), idea, "The newer feedback entry", BASE_TIME + timedelta(hours=1)
    )

    details = idea_service.get_idea_by_id(db_session, idea.id)

    assert details is not None
    assert details.average_rating == 4.0
    assert details.rating_count == 1
    assert details.feedback_count == 2
    assert [entry.id for entry in details.feedback] == [newer.id, older.id]
    assert details.feedback[1].author.username == reviewer.username


def test_get_idea_by_id_missing(db_session) -> None:
    assert idea_service.get_idea_by_id(db_session, MISSING_ID) is None


def test_listing_defaults_to_newest_first(db_session, author, make_idea) -> None:
    for n in range(3):
        make_idea(author, title=f"Idea title {n}")

    listing = idea_service.get_ideas(db_session)

    assert _titles(listing) == ["Idea title 2", "Idea title 1", "Idea title 0"]
    assert listing.page == 1
    assert listing.total_pages == 1


def test_pages_concatenate_to_full_ordering(db_session, author, make_idea) -> None:
    for n in range(7):
        make_idea(author, title=f"Idea title {n}")

    full = _titles(idea_service.get_ideas(db_session, limit=100))
    pages = [idea_service.get_ideas(db_session, page=p, limit=3) for p in (1, 2, 3)]

    assert [len(page.ideas) for page in pages] == [3, 3, 1]
    assert sum((_titles(page) for page in pages), []) == full
    assert all(page.total_count == 7 and page.total_pages == 3 for page in pages)


def test_page_past_the_end_is_empty(db_session, author, make_idea) -> None:
    make_idea(author)

    listing = idea_service.get_ideas(db_session, page=5, limit=10)

    assert listing.ideas == []
    assert listing.total_count == 1
    assert listing.page == 5


def test_empty_listing_has_zero_pages(db_session) -> None:
    listing = idea_service.get_ideas(db_session)
    assert listing.total_count == 0
    assert listing.total_pages == 0


def test_limit_and_page_are_clamped(db_session, author, make_idea) -> None:
    for _ in range(3):
        make_idea(author)

    zero_limit = idea_service.get_ideas(db_session, page=0, limit=0)
    assert zero_limit.page == 1
    assert len(zero_limit.ideas) == 1
    assert zero_limit.total_pages == 3

    huge = idea_service.get_ideas(db_session, limit=10_000)
    assert len(huge.ideas) == 3


def test_sort_by_rating_puts_unrated_last(
    db_session, author, make_user, make_idea, rate
) -> None:
    unrated = make_idea(author, title="Unrated idea")
    low = make_idea(author, title="Low rated idea")
    high = make_idea(author, title="High rated idea")
    voter = make_user()
    rate(voter, low, 2)
    rate(voter, high, 5)

    listing = idea_service.get_ideas(db_session, sort_by=IdeaSort.RATING)

    assert [entry.id for entry in listing.ideas] == [high.id, low.id, unrated.id]


def test_sort_by_rating_breaks_ties_by_newest(
    db_session, author, make_user, make_idea, rate
) -> None:
    first = make_idea(author)
    second = make_idea(author)
    voter = make_user()
    rate(voter, first, 4)
    rate(voter, second, 4)

    listing = idea_service.get_ideas(db_session, sort_by="rating")

    assert [entry.id for entry in listing.ideas] == [second.id, first.id]


def test_sort_by_engagement_counts_feedback(
    db_session, author, make_user, make_idea, leave_feedback, rate
) -> None:
    quiet = make_idea(author, title="Quiet idea")
    busy = make_idea(author, title="Busy idea")
    rated_only = make_idea(author, title="Rated only idea")
    commenter = make_user()
    leave_feedback(commenter, busy)
    leave_feedback(commenter, busy)
    leave_feedback(commenter, quiet)
    for _ in range(3):
        rate(make_user(), rated_only, 5)

    listing = idea_service.get_ideas(db_session, sort_by=IdeaSort.ENGAGEMENT)

    assert [entry.id for entry in listing.ideas] == [busy.id, quiet.id, rated_only.id]
    assert [entry.feedback_count for entry in listing.ideas] == [2, 1, 0]


def test_counts_are_not_multiplied_by_joins(
    db_session, idea, make_user, rate, leave_feedback
) -> None:
    voters = [make_user() for _ in range(3)]
    for voter in voters:
        rate(voter, idea, 3)
    leave_feedback(voters[0], idea)
    leave_feedback(voters[1], idea)

    entry = idea_service.get_ideas(db_session).ideas[0]

    assert entry.rating_count == 3
    assert entry.feedback_count == 2
    assert entry.average_rating == 3.0


def test_invalid_sort_is_rejected(db_session) -> None:
    with pytest.raises(ValidationError, match="Invalid sortBy"):
        idea_service.get_ideas(db_session, sort_by="popularity")


def test_search_is_case_insensitive_substring_of_title(
    db_session, author, make_idea
) -> None:
    make_idea(author, title="Solar Powered Bikes")
    make_idea(author, title="Rooftop solar farms")
    make_idea(author, title="Bike lanes everywhere", description="solar is not in the title")

    listing = idea_service.get_ideas(db_session, search="  SOLAR ")

    assert sorted(_titles(listing)) == ["Rooftop solar farms", "Solar Powered Bikes"]
    assert listing.total_count == 2


def test_search_folds_non_ascii_letters(db_session, author, make_idea) -> None:
    make_idea(author, title="Éclairs for the office")
    make_idea(author, title="Straßenfest im Sommer")
    make_idea(author, title="Plain ideas")

    assert _titles(idea_service.get_ideas(db_session, search="éclair")) == [
        "Éclairs for the office"
    ]
    assert _titles(idea_service.get_ideas(db_session, search="STRAßEN")) == [
        "Straßenfest im Sommer"
    ]


def test_search_treats_wildcards_literally(db_session, author, make_idea) -> None:
    make_idea(author, title="Discount 100% off")
    make_idea(author, title="Discount 100 dollars")

    listing = idea_service.get_ideas(db_session, search="100%")

    assert _titles(listing) == ["Discount 100% off"]


def test_blank_search_matches_everything(db_session, author, make_idea) -> None:
    make_idea(author)
    make_idea(author)

    assert idea_service.get_ideas(db_session, search="   ").total_count == 2


def test_rating_filters_use_rounded_average_and_skip_unrated(
    db_session, author, make_user, make_idea, rate
) -> None:
    make_idea(author, title="Unrated idea")
    mid = make_idea(author, title="Middle idea")
    top = make_idea(author, title="Top idea")
    low = make_idea(author, title="Low idea")
    voters = [make_user() for _ in range(2)]
    rate(voters[0], mid, 3)
    rate(voters[1], mid, 4)  # 3.5
    rate(voters[0], top, 5)
    rate(voters[0], low, 1)

    at_least = idea_service.get_ideas(db_session, min_rating=3.5)
    assert sorted(_titles(at_least)) == ["Middle idea", "Top idea"]
    assert at_least.total_count == 2

    at_most = idea_service.get_ideas(db_session, max_rating=3.5)
    assert sorted(_titles(at_most)) == ["Low idea", "Middle idea"]

    window = idea_service.get_ideas(db_session, min_rating=2, max_rating=4)
    assert _titles(window) == ["Middle idea"]
    assert window.total_count == 1
    assert window.total_pages == 1


def test_total_count_matches_filtered_rows(
    db_session, author, make_user, make_idea, rate
) -> None:
    voter = make_user()
    for n in range(5):
        entry = make_idea(author, title=f"Garden idea {n}")
        if n % 2 == 0:
            rate(voter, entry, 5)
    make_idea(author, title="Something else")

    listing = idea_service.get_ideas(db_session, search="garden", min_rating=4, limit=2)

    assert listing.total_count == 3
    assert listing.total_pages == 2
    every_page = listing.ideas + idea_service.get_ideas(
        db_session, page=2, search="garden", min_rating=4, limit=2
    ).ideas
    assert len(every_page) == listing.total_count


def test_out_of_range_bounds_are_ignored(db_session, author, make_idea) -> None:
    make_idea(author)
    assert idea_service.get_ideas(db_session, min_rating=0, max_rating=9).total_count == 1


def test_get_user_ideas_newest_first(db_session, author, reviewer, make_idea) -> None:
    older = make_idea(author)
    newer = make_idea(author)
    make_idea(reviewer)

    ideas = idea_service.get_user_ideas(db_session, author.id)

    assert [entry.id for entry in ideas] == [newer.id, older.id]
    assert idea_service.get_user_ideas(db_session, MISSING_ID) == []


def test_created_idea_reads_back_without_engagement(db_session, author) -> None:
    created = idea_service.create_idea(
        db_session, author.id, IdeaCreate(title="xyz sample", description="Readable right away")
    )

    details = idea_service.get_idea_by_id(db_session, created.id)

    assert details.rating_count == 0
    assert details.feedback_count == 0
    assert details.average_rating is None
    assert details.feedback == []
    assert _titles(idea_service.get_ideas(db_session, search="xyz")) == ["xyz sample"]


def test_get_idea_by_id_with_arbitrary_string(db_session) -> None:
    assert idea_service.get_idea_by_id(db_session, "nonexistent") is None
