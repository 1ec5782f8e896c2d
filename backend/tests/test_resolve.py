import pytest

from stagecms.extensions import db
from stagecms.application.resolution.resolve_post import resolve_post
from stagecms.domain.exceptions import NotFoundError, SchemaError
from stagecms.domain.tiers import Mode
from stagecms.models.module_instance import ModuleInstance
from stagecms.models.post_module import PostModule
from conftest import associations


def test_source_view_matches_approved_columns(make_post):
    post = make_post(
        title="Hello",
        excerpt="Approved excerpt",
        modules=[{"type": "callout", "props": {"title": "A"}}],
        custom_fields={"hero_color": "blue"},
    )

    resolved = resolve_post(post_id=post.id, mode="source")

    assert resolved["mode"] == "source"
    assert resolved["post"]["title"] == "Hello"
    assert resolved["post"]["excerpt"] == "Approved excerpt"
    assert resolved["custom_fields"] == {"hero_color": "blue"}
    assert [m["props"] for m in resolved["modules"]] == [{"title": "A"}]
    assert resolved["modules"][0]["scope"] == "local"
    assert resolved["modules"][0]["overrides"] is None


def test_fields_fall_back_through_lower_tiers(make_post):
    post = make_post(title="Approved", excerpt="Approved excerpt", meta_title="Approved meta")
    post.review_draft = {"title": "Reviewed", "excerpt": "Reviewed excerpt"}
    post.ai_review_draft = {"title": "Proposed"}
    db.session.commit()

    source = resolve_post(post_id=post.id, mode=Mode.SOURCE)["post"]
    review = resolve_post(post_id=post.id, mode=Mode.REVIEW)["post"]
    ai_review = resolve_post(post_id=post.id, mode=Mode.AI_REVIEW)["post"]

    assert (source["title"], source["excerpt"]) == ("Approved", "Approved excerpt")
    assert (review["title"], review["excerpt"]) == ("Reviewed", "Reviewed excerpt")
    assert (ai_review["title"], ai_review["excerpt"]) == ("Proposed", "Reviewed excerpt")
    assert ai_review["meta_title"] == "Approved meta"


def test_props_and_overrides_layer_per_tier(make_post):
    post = make_post(modules=[
        {"type": "callout", "props": {"title": "Local"}},
        {"type": "callout", "scope": "global", "global_slug": "cta", "props": {"title": "Shared", "body": "Base"}},
    ])
    local_pm, global_pm = associations(post.id)

    local_pm.module_instance.review_props = {"title": "Local reviewed"}
    global_pm.ai_review_overrides = {"title": "Per post"}
    db.session.commit()

    def props(mode):
        return [m["props"] for m in resolve_post(post_id=post.id, mode=mode)["modules"]]

    assert props("source") == [{"title": "Local"}, {"title": "Shared", "body": "Base"}]
    assert props("review") == [{"title": "Local reviewed"}, {"title": "Shared", "body": "Base"}]
    assert props("ai-review") == [{"title": "Local reviewed"}, {"title": "Per post", "body": "Base"}]


def test_staged_additions_and_deletions_are_tier_scoped(make_post):
    post = make_post(modules=[
        {"type": "callout", "props": {"title": "A"}},
        {"type": "callout", "props": {"title": "B"}},
        {"type": "callout", "props": {"title": "C"}},
        {"type": "callout", "props": {"title": "D"}},
    ])
    a, b, c, d = associations(post.id)
    a.review_added = True
    b.ai_review_added = True
    c.review_deleted = True
    d.ai_review_deleted = True
    db.session.commit()

    def titles(mode):
        return [m["props"]["title"] for m in resolve_post(post_id=post.id, mode=mode)["modules"]]

    assert titles("source") == ["C", "D"]
    assert titles("review") == ["A", "D"]
    assert titles("ai-review") == ["A", "B"]


def test_equal_order_index_breaks_ties_by_creation_then_id(make_post):
    post = make_post(modules=[
        {"type": "callout", "props": {"title": "First"}, "order_index": 0},
        {"type": "callout", "props": {"title": "Second"}, "order_index": 0},
        {"type": "callout", "props": {"title": "Third"}, "order_index": 0},
    ])

    rows = PostModule.query.filter_by(post_id=post.id).all()
    expected = [pm.id for pm in sorted(rows, key=lambda pm: pm.creation_key)]

    first = resolve_post(post_id=post.id, mode="source")
    second = resolve_post(post_id=post.id, mode="source")

    assert [m["post_module_id"] for m in first["modules"]] == expected
    assert first == second


def test_staged_order_applies_only_at_its_tier(make_post):
    post = make_post(modules=[
        {"type": "callout", "props": {"title": "A"}},
        {"type": "callout", "props": {"title": "B"}},
    ])
    a, _ = associations(post.id)
    post.ai_review_draft = {"module_order": {a.id: 5}}
    db.session.commit()

    def titles(mode):
        return [m["props"]["title"] for m in resolve_post(post_id=post.id, mode=mode)["modules"]]

    assert titles("review") == ["A", "B"]
    assert titles("ai-review") == ["B", "A"]


def test_resolve_is_a_pure_read(make_post):
    post = make_post(modules=[{"type": "callout", "props": {"title": "A"}}])
    post.ai_review_draft = {"title": "Proposed"}
    db.session.commit()
    updated_at = post.updated_at

    first = resolve_post(post_id=post.id, mode="ai-review")
    second = resolve_post(post_id=post.id, mode="ai-review")

    assert first == second
    assert not db.session.dirty
    assert post.updated_at == updated_at


def test_returned_views_do_not_alias_stored_json(make_post):
    post = make_post(modules=[{"type": "faq", "props": {"items": [{"q": "Why?"}]}}])

    resolved = resolve_post(post_id=post.id, mode="source")
    resolved["modules"][0]["props"]["items"].append({"q": "How?"})

    instance = ModuleInstance.query.one()
    assert instance.props == {"items": [{"q": "Why?"}]}


def test_soft_deleted_post_is_not_found(make_post):
    post = make_post()
    post.soft_delete()
    db.session.commit()

    with pytest.raises(NotFoundError):
        resolve_post(post_id=post.id, mode="source")


def test_unknown_post_and_unknown_mode(make_post):
    post = make_post()

    with pytest.raises(NotFoundError):
        resolve_post(post_id="missing", mode="source")
    with pytest.raises(SchemaError):
        resolve_post(post_id=post.id, mode="published")
