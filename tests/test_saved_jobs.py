import pytest

from resume_parser.tracker import JsonFileStorage, SavedJobs


@pytest.fixture
def saved(storage):
    return SavedJobs(storage)


def test_save_and_list(saved):
    saved.save("u1", "1")
    saved.save("u1", "2")

    assert [s.job_id for s in saved.list("u1")] == ["1", "2"]
    assert saved.is_saved("u1", "1")
    assert saved.count("u1") == 2


def test_saving_twice_is_a_no_op(saved):
    first = saved.save("u1", "1")
    second = saved.save("u1", "1")

    assert second.saved_at == first.saved_at
    assert saved.count("u1") == 1


def test_users_are_separate(saved):
    saved.save("u1", "1")

    assert not saved.is_saved("u2", "1")
    assert saved.list("u2") == []


def test_unsave(saved):
    saved.save("u1", "1")

    assert saved.unsave("u1", "1") is True
    assert saved.unsave("u1", "1") is False
    assert not saved.is_saved("u1", "1")


def test_separator_in_ids_does_not_collide(saved):
    saved.save("a__b", "c")

    assert not saved.is_saved("a", "b__c")
    assert not saved.is_saved("a:b", "c")
    assert saved.count("a") == 0


def test_separator_in_ids_on_disk(tmp_path):
    saved = SavedJobs(JsonFileStorage(str(tmp_path)))
    saved.save("a__b", "c")
    saved.save("a", "b__c")

    assert saved.count("a__b") == 1
    assert saved.count("a") == 1
    assert saved.unsave("a", "b__c") is True
    assert saved.is_saved("a__b", "c")
