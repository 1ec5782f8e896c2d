import itertools

import pytest
from flask_jwt_extended import create_access_token

from stagecms import create_app
from stagecms.extensions import db
from stagecms.application.posts.create_post import create_post
from stagecms.models.post_module import PostModule


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def catalog(app):
    return app.extensions["module_catalog"]


@pytest.fixture
def make_post(catalog):
    counter = itertools.count(1)

    def _make(modules=None, custom_fields=None, **fields):
        n = next(counter)
        data = {"type": "page", "slug": f"post-{n}", "title": f"Post {n}"}
        data.update(fields)
        return create_post(
            data=data,
            modules=modules or [],
            custom_fields=custom_fields,
            catalog=catalog,
        )

    return _make


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    token = create_access_token(identity="7")
    return {"Authorization": f"Bearer {token}"}


def associations(post_id):
    """Association rows in render order."""
    return (
        PostModule.query
        .filter_by(post_id=post_id)
        .order_by(PostModule.order_index, PostModule.created_at, PostModule.id)
        .all()
    )


def without_mode(resolved):
    return {key: value for key, value in resolved.items() if key != "mode"}
