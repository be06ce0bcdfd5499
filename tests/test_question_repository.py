from __future__ import annotations

import pytest

from assign_app.core.services.api_client import ApiError
from assign_app.core.services.question_repository import QuestionRepository


@pytest.fixture
def repository(api) -> QuestionRepository:
    return QuestionRepository(api)


def test_load_block_caches_questions(repository):
    questions = repository.load_block(11)
    assert [q.id for q in questions] == [1, 2]
    assert repository.assignment_block_id == 11
    assert repository.get_question_count() == 2


def test_refresh_without_block_is_a_no_op(repository, store):
    assert repository.refresh() == []
    assert store.calls == []


def test_failed_load_keeps_previous_listing(repository, store):
    repository.load_block(11)
    store.fail_once("GET", "/admin/questions", 503, {"message": "Maintenance"})

    with pytest.raises(ApiError):
        repository.load_block(12)

    assert repository.assignment_block_id == 11
    assert repository.get_question_count() == 2


def test_delete_removes_locally_after_server_success(repository, store):
    repository.load_block(11)
    repository.delete_question(1)
    assert [q.id for q in repository.get_questions()] == [2]
    assert 1 not in store.questions


def test_failed_delete_keeps_the_question(repository, store):
    repository.load_block(11)
    store.fail_once("DELETE", "/admin/questions/1", 403, {"message": "Forbidden"})
    with pytest.raises(ApiError):
        repository.delete_question(1)
    assert repository.get_question(1).id == 1


def test_unknown_question_lookup(repository):
    repository.load_block(11)
    with pytest.raises(LookupError):
        repository.get_question(3)
    with pytest.raises(LookupError):
        repository.delete_question(3)
