import pytest

from models import db, Like, Pass
from utils.content import deactivate_post
from utils.decisions import (
    record_decision,
    has_decided,
    decision_of,
    likes_by_user,
    likes_on_posts_owned_by,
    like_counts,
    LIKE,
    PASS,
)
from utils.errors import ValidationError, NotFound


@pytest.fixture
def alice_bob_post(make_user, make_post):
    alice = make_user('alice')
    bob = make_user('bob')
    post_id = make_post(bob)
    return alice, bob, post_id


def test_record_like(alice_bob_post):
    alice, bob, post_id = alice_bob_post

    outcome = record_decision(alice, post_id, LIKE)

    assert outcome.kind == LIKE
    assert outcome.matched is False
    assert outcome.owner_id == bob
    assert has_decided(alice, post_id)
    assert decision_of(alice, post_id) == LIKE
    assert not has_decided(bob, post_id)


def test_like_twice_keeps_one_row(alice_bob_post):
    alice, _, post_id = alice_bob_post

    record_decision(alice, post_id, LIKE)
    record_decision(alice, post_id, LIKE)

    assert Like.query.filter_by(user_id=alice, code_post_id=post_id).count() == 1
    assert Pass.query.filter_by(user_id=alice, code_post_id=post_id).count() == 0


def test_decision_can_flip_both_ways(alice_bob_post):
    alice, _, post_id = alice_bob_post

    record_decision(alice, post_id, LIKE)
    record_decision(alice, post_id, PASS)

    assert decision_of(alice, post_id) == PASS
    assert Like.query.filter_by(user_id=alice).count() == 0
    assert Pass.query.filter_by(user_id=alice).count() == 1

    record_decision(alice, post_id, LIKE)

    assert decision_of(alice, post_id) == LIKE
    assert Pass.query.filter_by(user_id=alice).count() == 0


def test_invalid_kind_is_rejected(alice_bob_post):
    alice, _, post_id = alice_bob_post

    with pytest.raises(ValidationError):
        record_decision(alice, post_id, 'superlike')

    assert not has_decided(alice, post_id)


def test_decision_on_missing_or_retracted_post(alice_bob_post):
    alice, bob, post_id = alice_bob_post
    deactivate_post(post_id, bob)

    with pytest.raises(NotFound):
        record_decision(alice, post_id, LIKE)
    with pytest.raises(NotFound):
        record_decision(alice, 424242, PASS)

    assert Like.query.count() == 0


def test_like_queries(make_user, make_post):
    alice = make_user('alice')
    bob = make_user('bob')
    carol = make_user('carol')
    bob_first = make_post(bob)
    bob_second = make_post(bob)
    carol_post = make_post(carol)

    record_decision(alice, bob_first, LIKE)
    record_decision(alice, carol_post, LIKE)
    record_decision(carol, bob_second, LIKE)
    record_decision(carol, bob_first, PASS)

    assert likes_by_user(alice) == {bob_first, carol_post}
    assert likes_by_user(bob) == set()

    assert likes_on_posts_owned_by(bob) == {(alice, bob_first), (carol, bob_second)}
    assert likes_on_posts_owned_by(bob, liker_id=carol) == {(carol, bob_second)}
    assert likes_on_posts_owned_by(alice) == set()

    assert like_counts([bob_first, bob_second, carol_post]) == {
        bob_first: 1,
        bob_second: 1,
        carol_post: 1,
    }
    assert like_counts([]) == {}


def test_unexpected_error_in_match_step_rolls_back_like(alice_bob_post, monkeypatch):
    alice, _, post_id = alice_bob_post

    def boom(liker_id, post_id):
        raise RuntimeError("match engine exploded")

    monkeypatch.setattr('utils.matching.evaluate_match', boom)

    with pytest.raises(RuntimeError):
        record_decision(alice, post_id, LIKE)

    db.session.commit()
    assert Like.query.count() == 0
    assert not has_decided(alice, post_id)
