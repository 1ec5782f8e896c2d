import pytest

from stagecms.application.posts.create_post import create_post
from stagecms.domain.exceptions import RestrictedFieldError, SchemaError
from stagecms.models.module_instance import ModuleInstance
from stagecms.models.post_revision import PostRevision
from conftest import associations


def test_create_writes_the_approved_tier(make_post):
    post = make_post(
        title="About",
        modules=[
            {"type": "callout", "props": {"title": "A"}},
            {"type": "callout", "scope": "global", "global_slug": "cta", "props": {"title": "Shared"}},
        ],
    )

    rows = associations(post.id)
    assert [pm.order_index for pm in rows] == [0, 1]
    assert not any(pm.ai_review_added or pm.review_added for pm in rows)
    assert post.review_draft is None and post.ai_review_draft is None

    revision = PostRevision.query.filter_by(post_id=post.id).one()
    assert (revision.mode, revision.action) == ("source", "create")
    assert len(revision.snapshot["modules"]) == 2


def test_global_slug_is_reused_within_one_call(make_post):
    module = {"type": "callout", "scope": "global", "global_slug": "cta", "props": {"title": "Shared"}}

    post = make_post(modules=[module, dict(module)])

    assert len(associations(post.id)) == 2
    assert ModuleInstance.query.count() == 1


def test_duplicate_slug_is_rejected(make_post):
    make_post(slug="about")

    with pytest.raises(SchemaError):
        make_post(slug="about")


@pytest.mark.parametrize(
    "data",
    [
        {"type": "page", "slug": "x"},
        {"type": "page", "slug": "x", "title": "X", "review_draft": {}},
    ],
)
def test_invalid_post_data(catalog, data):
    with pytest.raises(SchemaError):
        create_post(data=data, catalog=catalog)


def test_local_modules_do_not_take_overrides(make_post):
    with pytest.raises(SchemaError):
        make_post(modules=[{"type": "callout", "props": {"title": "A"}, "overrides": {"title": "B"}}])


def test_global_overrides_cannot_rewrite_identity(make_post):
    with pytest.raises(RestrictedFieldError):
        make_post(modules=[{
            "type": "callout",
            "scope": "global",
            "global_slug": "cta",
            "props": {"title": "A"},
            "overrides": {"type": "hero"},
        }])


def test_seeded_order_must_be_an_integer(make_post):
    with pytest.raises(SchemaError):
        make_post(modules=[{"type": "callout", "props": {"title": "A"}, "order_index": "1"}])
