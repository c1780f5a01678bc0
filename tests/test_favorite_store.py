import threading

import pytest

from movieshelf.errors import ConflictError


def test_add_and_find(favorite_store):
    favorite = favorite_store.add(1, 42, "X", poster_path="/x.jpg", rating="7.5")

    assert favorite.id == 1
    assert favorite.user_id == 1
    assert favorite.movie_id == 42
    assert favorite_store.find(1, 42) == favorite
    assert favorite_store.find(2, 42) is None


def test_double_add_rejected_by_store(favorite_store):
    favorite_store.add(1, 42, "X")

    with pytest.raises(ConflictError):
        favorite_store.add(1, 42, "X again")

    assert len(favorite_store.list_by_user(1)) == 1
    assert favorite_store.find(1, 42).title == "X"


def test_same_movie_for_different_users(favorite_store):
    favorite_store.add(1, 42, "X")
    favorite_store.add(2, 42, "X")

    assert len(favorite_store.list_by_user(1)) == 1
    assert len(favorite_store.list_by_user(2)) == 1


def test_list_keeps_insertion_order(favorite_store):
    for movie_id in (30, 10, 20):
        favorite_store.add(1, movie_id, f"Movie {movie_id}")
    favorite_store.add(2, 5, "Someone else's")

    assert [fav.movie_id for fav in favorite_store.list_by_user(1)] == [30, 10, 20]


def test_remove(favorite_store):
    favorite_store.add(1, 42, "X")

    assert favorite_store.remove(1, 42) is True
    assert favorite_store.find(1, 42) is None
    assert favorite_store.remove(1, 42) is False


def test_remove_never_favorited_returns_false(favorite_store):
    assert favorite_store.remove(1, 999) is False


def test_re_add_after_remove(favorite_store):
    favorite_store.add(1, 42, "X")
    favorite_store.remove(1, 42)

    favorite = favorite_store.add(1, 42, "X")
    assert favorite_store.find(1, 42) == favorite


def test_concurrent_adds_keep_one_record(favorite_store):
    results = []
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        try:
            favorite_store.add(1, 42, "X")
            results.append("added")
        except ConflictError:
            results.append("conflict")

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count("added") == 1
    assert results.count("conflict") == 7
    assert len(favorite_store.list_by_user(1)) == 1
