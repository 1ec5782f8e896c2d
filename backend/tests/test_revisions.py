from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError

from stagecms.extensions import db
from stagecms.application.revisions.get_revision import get_revision
from stagecms.application.revisions.list_revisions import list_revisions
from stagecms.application.staging import stage_module_remove as remove_module
from stagecms.application.staging.stage_field_patch import stage_field_patch
from stagecms.domain.exceptions import NotFoundError, SchemaError, TransactionError
from stagecms.models.post_revision import PostRevision
from stagecms.utils.pagination import decode_cursor, encode_cursor
from conftest import associations


def test_every_write_appends_a_revision(make_post):
    post = make_post()
    for title in ("One", "Two", "Three"):
        stage_field_patch(post_id=post.id, patch={"title": title})

    items, meta = list_revisions(post_id=post.id, limit=10)

    assert len(items) == 4
    assert meta == {"has_more": False, "next_cursor": None}
    assert [r.action for r in items].count("stage-field-patch") == 3
    assert items[-1].action == "create"


def test_cursor_pages_cover_history_without_overlap(make_post):
    post = make_post()
    for n in range(6):
        stage_field_patch(post_id=post.id, patch={"title": f"Title {n}"})

    seen = []
    cursor = None
    while True:
        items, meta = list_revisions(post_id=post.id, limit=3, cursor=cursor)
        seen.extend(r.id for r in items)
        if not meta["has_more"]:
            break
        cursor = meta["next_cursor"]

    assert len(seen) == 7
    assert len(set(seen)) == 7


def test_list_filters_by_mode(make_post):
    post = make_post()
    stage_field_patch(post_id=post.id, patch={"title": "Proposed"})

    items, _ = list_revisions(post_id=post.id, mode="source")

    assert [r.action for r in items] == ["create"]


def test_invalid_cursor_and_limit(make_post):
    post = make_post()

    with pytest.raises(SchemaError):
        list_revisions(post_id=post.id, cursor="garbage")
    with pytest.raises(SchemaError):
        list_revisions(post_id=post.id, limit=0)


def test_cursor_round_trip():
    created_at = datetime(2024, 5, 1, 12, 30, 15, 123456)

    assert decode_cursor(encode_cursor(created_at, "abc")) == (created_at, "abc")


def test_get_revision_is_scoped_to_its_post(make_post):
    post = make_post()
    other = make_post()
    (revision,) = PostRevision.query.filter_by(post_id=post.id).all()

    assert get_revision(post_id=post.id, revision_id=revision.id).snapshot["mode"] == "source"
    with pytest.raises(NotFoundError):
        get_revision(post_id=other.id, revision_id=revision.id)


def test_revisions_are_immutable(make_post):
    post = make_post()
    revision = PostRevision.query.filter_by(post_id=post.id).one()

    revision.action = "rewritten"
    with pytest.raises(RuntimeError):
        db.session.commit()
    db.session.rollback()

    db.session.delete(revision)
    with pytest.raises(RuntimeError):
        db.session.commit()
    db.session.rollback()

    assert PostRevision.query.filter_by(post_id=post.id).one().action == "create"


def test_store_failure_rolls_back_the_whole_operation(make_post, monkeypatch):
    post = make_post(modules=[{"type": "callout", "props": {"title": "A"}}])
    (post_module,) = associations(post.id)

    def failing_record_revision(**kwargs):
        raise OperationalError("INSERT INTO post_revisions", {}, Exception("disk I/O error"))

    monkeypatch.setattr(remove_module, "record_revision", failing_record_revision)

    with pytest.raises(TransactionError):
        remove_module.stage_module_remove(post_module_id=post_module.id)

    db.session.refresh(post_module)
    db.session.refresh(post)
    assert post_module.ai_review_deleted is False
    assert post.ai_review_draft is None
