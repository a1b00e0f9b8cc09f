import pytest

from watersim.rng import RngStream, seed_from_text


def test_seed_from_text_accepts_integers() -> None:
    assert seed_from_text("42") == 42
    assert seed_from_text(" 7 ") == 7
    assert seed_from_text("-1") == (1 << 64) - 1


def test_seed_from_text_hashes_words_deterministically() -> None:
    a = seed_from_text("rainy")
    b = seed_from_text("rainy")
    c = seed_from_text("sunny")

    assert a == b
    assert a != c
    assert 0 <= a < (1 << 64)


def test_seed_from_text_rejects_empty() -> None:
    with pytest.raises(ValueError):
        seed_from_text("   ")


def test_forks_are_stable_and_distinct() -> None:
    root = RngStream(123)

    assert root.fork("injection").seed == RngStream(123).fork("injection").seed
    assert root.fork("injection").seed != root.fork("splash").seed
    with pytest.raises(ValueError):
        root.fork("")

    draws_a = root.fork("injection").generator().integers(1000, size=8).tolist()
    draws_b = root.fork("injection").generator().integers(1000, size=8).tolist()
    assert draws_a == draws_b


def test_fork_path_matches_nested_forks() -> None:
    root = RngStream(99)

    assert root.fork("injection", "splash") == root.fork("injection").fork("splash")
    assert root.fork("injection", "inlet").seed != root.fork("injection", "splash").seed
    with pytest.raises(ValueError):
        root.fork()
    with pytest.raises(ValueError):
        root.fork("injection", "")
