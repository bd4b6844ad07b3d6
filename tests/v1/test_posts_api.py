# tests/v1/test_posts_api.py
from fastapi import status
from sqlalchemy import func, select

from inkwell.models import Tag

POSTS = "/api/v1/posts"


def _payload(**overrides) -> dict:
    payload = {
        "title": "Training a pitbull",
        "description": "Notes from the first month",
        "content": "Start with short sessions.",
    }
    payload.update(overrides)
    return payload


class TestCreatePost:
    def test_create_post_with_tags(self, client, editor, auth_headers):
        response = client.post(
            f"{POSTS}/",
            json=_payload(tags=["dogs", "training"], banner="banners/pitbull.png"),
            headers=auth_headers(editor),
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["user"] == {"id": editor.id, "name": editor.name}
        assert [tag["name"] for tag in data["tags"]] == ["dogs", "training"]
        assert data["visible"] is True
        assert data["private"] is False
        assert data["banner"] == "http://test/storage/banners/pitbull.png"

    def test_anonymous_caller_is_rejected(self, client):
        response = client.post(f"{POSTS}/", json=_payload())

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_caller_without_capability_is_forbidden(self, client, reader, auth_headers):
        response = client.post(f"{POSTS}/", json=_payload(), headers=auth_headers(reader))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_short_title_is_rejected(self, client, editor, auth_headers):
        response = client.post(
            f"{POSTS}/", json=_payload(title="Hi"), headers=auth_headers(editor)
        )

        assert response.status_code == 422

    def test_overlong_tag_name_is_rejected(self, client, db_session, editor, auth_headers):
        response = client.post(
            f"{POSTS}/", json=_payload(tags=["t" * 400]), headers=auth_headers(editor)
        )

        assert response.status_code == 422
        assert db_session.scalar(select(func.count()).select_from(Tag)) == 0

    def test_invalid_token_is_rejected(self, client):
        response = client.post(
            f"{POSTS}/",
            json=_payload(),
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestShowPost:
    def test_public_post_is_readable_anonymously(self, client, editor, make_post):
        post = make_post(editor, tags=["dogs"])

        response = client.get(f"{POSTS}/{post.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["title"] == post.title

    def test_missing_post_is_not_found(self, client):
        response = client.get(f"{POSTS}/424242")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_hidden_post_is_only_shown_to_editors(
        self, client, editor, reader, make_post, auth_headers
    ):
        post = make_post(editor, visible=False)

        assert client.get(f"{POSTS}/{post.id}").status_code == status.HTTP_404_NOT_FOUND
        assert (
            client.get(f"{POSTS}/{post.id}", headers=auth_headers(reader)).status_code
            == status.HTTP_404_NOT_FOUND
        )
        assert (
            client.get(f"{POSTS}/{post.id}", headers=auth_headers(editor)).status_code
            == status.HTTP_200_OK
        )

    def test_private_post_requires_authentication(
        self, client, editor, reader, make_post, auth_headers
    ):
        post = make_post(editor, private=True)

        assert client.get(f"{POSTS}/{post.id}").status_code == status.HTTP_401_UNAUTHORIZED
        assert (
            client.get(f"{POSTS}/{post.id}", headers=auth_headers(reader)).status_code
            == status.HTTP_200_OK
        )

    def test_edit_view_requires_update_capability(
        self, client, editor, other_editor, reader, make_post, auth_headers
    ):
        post = make_post(editor)

        assert (
            client.get(f"{POSTS}/{post.id}/edit", headers=auth_headers(reader)).status_code
            == status.HTTP_403_FORBIDDEN
        )
        assert (
            client.get(
                f"{POSTS}/{post.id}/edit", headers=auth_headers(other_editor)
            ).status_code
            == status.HTTP_200_OK
        )


class TestUpdatePost:
    def test_tags_are_synchronized(self, client, db_session, editor, make_post, auth_headers):
        post = make_post(editor, tags=["x", "y"])

        response = client.put(
            f"{POSTS}/{post.id}",
            json=_payload(tags=["y", "z"]),
            headers=auth_headers(editor),
        )

        assert response.status_code == status.HTTP_200_OK
        db_session.refresh(post)
        assert post.tag_names == ["y", "z"]
        assert post.title == "Training a pitbull"

    def test_omitted_tags_and_flags_are_kept(
        self, client, db_session, editor, make_post, auth_headers
    ):
        post = make_post(editor, tags=["x"], visible=False, private=True)

        response = client.put(
            f"{POSTS}/{post.id}", json=_payload(tags=[]), headers=auth_headers(editor)
        )

        assert response.status_code == status.HTTP_200_OK
        db_session.refresh(post)
        assert post.tag_names == ["x"]
        assert post.visible is False
        assert post.private is True

    def test_current_banner_url_leaves_banner_unchanged(
        self, client, db_session, editor, make_post, auth_headers
    ):
        post = make_post(editor, banner="banners/old.png")

        client.put(
            f"{POSTS}/{post.id}",
            json=_payload(banner="http://test/storage/banners/old.png"),
            headers=auth_headers(editor),
        )

        db_session.refresh(post)
        assert post.banner == "banners/old.png"

    def test_new_banner_replaces_old_one(
        self, client, db_session, editor, make_post, auth_headers
    ):
        post = make_post(editor, banner="banners/old.png")

        client.put(
            f"{POSTS}/{post.id}",
            json=_payload(banner="banners/new.png"),
            headers=auth_headers(editor),
        )

        db_session.refresh(post)
        assert post.banner == "banners/new.png"

    def test_overlong_new_banner_is_rejected(
        self, client, db_session, editor, make_post, auth_headers
    ):
        post = make_post(editor, banner="banners/old.png")

        response = client.put(
            f"{POSTS}/{post.id}",
            json=_payload(banner="b/" + "x" * 400),
            headers=auth_headers(editor),
        )

        assert response.status_code == 422
        assert "banner" in response.json()["errors"]
        db_session.refresh(post)
        assert post.banner == "banners/old.png"
        assert post.title == "A post title"

    def test_blank_tag_names_leave_tags_unchanged(
        self, client, db_session, editor, make_post, auth_headers
    ):
        post = make_post(editor, tags=["x", "y"])

        response = client.put(
            f"{POSTS}/{post.id}", json=_payload(tags=[" ", ""]), headers=auth_headers(editor)
        )

        assert response.status_code == status.HTTP_200_OK
        db_session.refresh(post)
        assert post.tag_names == ["x", "y"]

    def test_owner_without_capability_can_update(
        self, client, db_session, reader, make_post, auth_headers
    ):
        post = make_post(reader)

        response = client.put(
            f"{POSTS}/{post.id}", json=_payload(), headers=auth_headers(reader)
        )

        assert response.status_code == status.HTTP_200_OK

    def test_foreign_post_without_capability_is_forbidden(
        self, client, editor, reader, make_post, auth_headers
    ):
        post = make_post(editor)

        response = client.put(
            f"{POSTS}/{post.id}", json=_payload(), headers=auth_headers(reader)
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestDeletePost:
    def test_delete_then_not_found(self, client, editor, make_post, auth_headers):
        post = make_post(editor)

        response = client.delete(f"{POSTS}/{post.id}", headers=auth_headers(editor))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert client.get(f"{POSTS}/{post.id}").status_code == status.HTTP_404_NOT_FOUND

    def test_anonymous_delete_is_rejected(self, client, editor, make_post):
        post = make_post(editor)

        assert client.delete(f"{POSTS}/{post.id}").status_code == status.HTTP_401_UNAUTHORIZED


class TestListPosts:
    def test_listing_returns_page_metadata(self, client, editor, make_post):
        for i in range(16):
            make_post(editor, title=f"Post number {i}")

        response = client.get(f"{POSTS}/", params={"page": 2})

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert len(body["data"]) == 1
        assert body["data"][0]["title"] == "Post number 0"
        assert body["meta"] == {
            "current_page": 2,
            "per_page": 15,
            "total": 16,
            "last_page": 2,
        }

    def test_combined_filters(self, client, editor, make_post):
        make_post(editor, title="Pitbull training", tags=["dogs"])
        make_post(editor, title="Pitbull and cats", tags=["dogs"])
        make_post(editor, title="Poodle", tags=["products"])

        response = client.get(
            f"{POSTS}/", params={"q": "pitbull", "t": "dogs,products", "e": "cats"}
        )

        assert [post["title"] for post in response.json()["data"]] == ["Pitbull training"]

    def test_private_listing_requires_authentication(self, client):
        response = client.get(f"{POSTS}/", params={"p": "1"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_mine_for_reader_is_forbidden(self, client, reader, auth_headers):
        response = client.get(f"{POSTS}/", params={"mine": "1"}, headers=auth_headers(reader))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_invalid_exclusion_reports_field_error(self, client):
        response = client.get(f"{POSTS}/", params={"e": "(unclosed"})

        assert response.status_code == 422
        assert "e" in response.json()["errors"]

    def test_page_must_be_positive(self, client):
        response = client.get(f"{POSTS}/", params={"page": 0})

        assert response.status_code == 422
