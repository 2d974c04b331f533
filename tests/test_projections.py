"""
Tests for the thread projection engine.

Threads are built in memory with fixed timestamps so ordering is exact.
"""

from projections import expand, list_recent_threads, full_thread
from replies import Reply
from threads import Thread


def make_thread(thread_id, bumped_on, reply_times=(), created_on=None):
    created_on = bumped_on if created_on is None else created_on
    thread = Thread(thread_id, f"text {thread_id}", "hash", created_on=created_on, bumped_on=bumped_on)
    for i, created in enumerate(reply_times):
        thread.replies.append(Reply(f"{thread_id}-r{i}", f"reply {i}", "hash", created_on=created))
    return thread


def test_empty_board_lists_nothing():
    assert list_recent_threads([]) == []


def test_thread_without_replies_has_no_placeholder():
    [summary] = list_recent_threads([make_thread("a", 100.0)])

    assert summary.replies == []
    assert summary.replycount == 0


def test_single_reply_is_counted_and_listed():
    [summary] = list_recent_threads([make_thread("a", 100.0, [101.0])])

    assert summary.replycount == 1
    assert [r.id for r in summary.replies] == ["a-r0"]


def test_listing_keeps_three_newest_replies_newest_first():
    thread = make_thread("a", 100.0, [101.0, 105.0, 102.0, 104.0, 103.0])

    [summary] = list_recent_threads([thread])

    assert summary.replycount == 5
    assert [r.id for r in summary.replies] == ["a-r1", "a-r3", "a-r4"]


def test_listing_orders_by_bump_and_limits_to_ten():
    threads = [make_thread(f"t{i:02d}", float(i)) for i in range(15)]

    summaries = list_recent_threads(threads)

    assert len(summaries) == 10
    assert [s.id for s in summaries] == [f"t{i:02d}" for i in range(14, 4, -1)]


def test_listing_bounds_hold_for_mixed_threads():
    threads = [make_thread(f"t{i}", float(i), [float(i) + j / 10 for j in range(i)]) for i in range(12)]

    summaries = list_recent_threads(threads)

    assert len(summaries) <= 10
    for summary in summaries:
        assert len(summary.replies) <= 3
        assert summary.replycount >= len(summary.replies)
        assert all(reply.id for reply in summary.replies)


def test_private_fields_are_not_projected():
    thread = make_thread("a", 100.0, [101.0])
    thread.reported = True
    thread.replies[0].reported = True

    summary = list_recent_threads([thread])[0].model_dump(by_alias=True)
    full = full_thread(thread).model_dump(by_alias=True)

    for view in (summary, full):
        assert "reported" not in view
        assert "delete_password" not in view
        assert set(view["replies"][0]) == {"_id", "text", "created_on"}
    assert set(summary) == {"_id", "text", "created_on", "bumped_on", "replies", "replycount"}
    assert set(full) == {"_id", "text", "created_on", "bumped_on", "replies"}


def test_full_thread_keeps_every_reply_in_insertion_order():
    thread = make_thread("a", 100.0, [103.0, 101.0, 105.0, 102.0, 104.0])

    view = full_thread(thread)

    assert [r.id for r in view.replies] == [f"a-r{i}" for i in range(5)]


def test_full_thread_without_replies():
    view = full_thread(make_thread("a", 100.0))

    assert view.id == "a"
    assert view.replies == []


def test_thread_scalars_come_from_the_thread():
    thread = make_thread("a", 200.0, [150.0, 160.0], created_on=100.0)

    [summary] = list_recent_threads([thread])

    assert summary.text == "text a"
    assert summary.created_on.timestamp() == 100.0
    assert summary.bumped_on.timestamp() == 200.0


def test_expand_emits_one_row_per_reply():
    rows = list(expand([make_thread("a", 1.0, [1.0, 2.0]), make_thread("b", 1.0)]))

    assert [(row.thread.thread_id, row.reply_count) for row in rows] == [("a", 2), ("a", 2), ("b", 0)]
    assert rows[2].reply is None
