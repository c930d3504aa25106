"""HTTP tests for the editorial and discovery APIs."""

import threading
import uuid
from datetime import datetime, timedelta, timezone

from cms.database import SessionLocal
from cms.services.view_counter import ViewCounter
from tests.factories import program_json

CMS = "/api/cms"
DISCOVERY = "/api/discovery"


def post_program(client, **overrides):
    response = client.post(f"{CMS}/programs", json=program_json(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


def put_program(client, program_id, **overrides):
    body = program_json(**overrides)
    body["id"] = str(program_id)
    return client.put(f"{CMS}/programs/{program_id}", json=body)


class TestEditorialPrograms:
    """Editorial create, read, replace and delete."""

    def test_create_returns_201_with_location(self, client, make_category, make_tag):
        category = make_category("Technology")
        tag = make_tag("AI")

        response = client.post(
            f"{CMS}/programs",
            json=program_json(title="Launch", category_ids=[category], tag_ids=[tag]),
            headers={"X-User-Name": "alice"},
        )

        assert response.status_code == 201
        data = response.json()
        assert response.headers["location"] == f"/api/cms/programs/{data['id']}"
        assert data["title"] == "Launch"
        assert data["type_name"] == "Tutorial"
        assert data["language_name"] == "English"
        assert data["status_name"] == "Published"
        assert data["created_by"] == "alice"
        assert data["version"] == 1
        assert [c["name"] for c in data["categories"]] == ["Technology"]
        assert [t["name"] for t in data["tags"]] == ["AI"]

    def test_create_without_actor_header_uses_system(self, client):
        assert post_program(client)["created_by"] == "System"

    def test_create_rejects_invalid_fields(self, client):
        assert client.post(f"{CMS}/programs", json=program_json(title="")).status_code == 422
        assert (
            client.post(f"{CMS}/programs", json=program_json(video_url="not a url")).status_code
            == 422
        )
        assert client.post(f"{CMS}/programs", json=program_json(type=9)).status_code == 422
        negative = program_json(duration=timedelta(seconds=-5))
        assert client.post(f"{CMS}/programs", json=negative).status_code == 422

    def test_create_with_unknown_category_is_rejected(self, client):
        response = client.post(
            f"{CMS}/programs", json=program_json(category_ids=[uuid.uuid4()])
        )

        assert response.status_code == 409
        assert response.json()["error"] == "constraint_violation"
        search = client.post(f"{CMS}/programs/search", json={"status": 0})
        assert search.json()["total_count"] == 0

    def test_create_converts_offset_published_date_to_utc(self, client):
        program = post_program(
            client,
            published_date=datetime(
                2024, 1, 15, 12, 0, tzinfo=timezone(timedelta(hours=5))
            ),
        )

        assert program["published_date"] == "2024-01-15T07:00:00"

    def test_get_any_status(self, client):
        draft = post_program(client, status=1)

        response = client.get(f"{CMS}/programs/{draft['id']}")

        assert response.status_code == 200
        assert response.json()["status_name"] == "Draft"

    def test_get_missing_returns_404(self, client):
        assert client.get(f"{CMS}/programs/{uuid.uuid4()}").status_code == 404

    def test_update_replaces_program(self, client, make_category):
        old = make_category("Old")
        new = make_category("New")
        program = post_program(client, title="Before", category_ids=[old])

        response = put_program(
            client, program["id"], title="After", status=4, category_ids=[new]
        )

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "After"
        assert data["status_name"] == "Archived"
        assert [c["name"] for c in data["categories"]] == ["New"]
        assert data["version"] == 2

    def test_update_id_mismatch_returns_400(self, client):
        program = post_program(client)
        body = program_json()
        body["id"] = str(uuid.uuid4())

        response = client.put(f"{CMS}/programs/{program['id']}", json=body)

        assert response.status_code == 400
        assert response.json()["detail"] == "ID mismatch"

    def test_update_missing_returns_404(self, client):
        missing = uuid.uuid4()

        assert put_program(client, missing).status_code == 404

    def test_update_with_stale_version_returns_409(self, client):
        program = post_program(client)
        first = put_program(client, program["id"], title="First", expected_version=1)
        assert first.status_code == 200

        response = put_program(client, program["id"], title="Second", expected_version=1)

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"
        assert client.get(f"{CMS}/programs/{program['id']}").json()["title"] == "First"

    def test_delete_then_delete_again(self, client):
        program = post_program(client)

        assert client.delete(f"{CMS}/programs/{program['id']}").status_code == 204
        assert client.delete(f"{CMS}/programs/{program['id']}").status_code == 404
        assert client.get(f"{CMS}/programs/{program['id']}").status_code == 404

    def test_get_records_a_view(self, client):
        program = post_program(client)

        client.get(f"{CMS}/programs/{program['id']}")
        client.get(f"{CMS}/programs/{program['id']}")

        assert client.get(f"{CMS}/programs/{program['id']}").json()["view_count"] == 2


class TestEditorialSearch:
    """Editorial search across statuses."""

    def test_default_search_returns_published_only(self, client):
        post_program(client, title="Live", status=3)
        post_program(client, title="Draft", status=1)

        data = client.post(f"{CMS}/programs/search", json={}).json()

        assert [item["title"] for item in data["items"]] == ["Live"]

    def test_all_statuses(self, client):
        post_program(client, status=3)
        post_program(client, status=1)
        post_program(client, status=5)

        data = client.post(f"{CMS}/programs/search", json={"status": 0}).json()

        assert data["total_count"] == 3

    def test_page_size_capped_at_100(self, client):
        data = client.post(f"{CMS}/programs/search", json={"page_size": 1000}).json()

        assert data["page_size"] == 100
        assert data["total_pages"] == 1

    def test_by_status(self, client):
        post_program(client, title="Review me", status=2)
        post_program(client, title="Live", status=3)

        response = client.get(f"{CMS}/programs/status/2")

        assert response.status_code == 200
        assert [p["title"] for p in response.json()] == ["Review me"]
        assert client.get(f"{CMS}/programs/status/9").status_code == 422


class TestReferenceData:
    """Category and tag management."""

    def test_create_and_list_categories(self, client):
        response = client.post(
            f"{CMS}/categories",
            json={"name": "Science", "description": "Science programs", "color": "#00ff00"},
        )

        assert response.status_code == 201
        assert [c["name"] for c in client.get(f"{CMS}/categories").json()] == ["Science"]

    def test_duplicate_category_returns_409(self, client):
        client.post(f"{CMS}/categories", json={"name": "Science"})

        response = client.post(f"{CMS}/categories", json={"name": "Science"})

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    def test_invalid_color_is_rejected(self, client):
        response = client.post(f"{CMS}/categories", json={"name": "Art", "color": "red"})

        assert response.status_code == 422

    def test_create_and_list_tags(self, client):
        assert client.post(f"{CMS}/tags", json={"name": "AI"}).status_code == 201
        assert client.post(f"{CMS}/tags", json={"name": "AI"}).status_code == 409
        assert [t["name"] for t in client.get(f"{CMS}/tags").json()] == ["AI"]

    def test_discovery_categories_count_published_programs(
        self, client, make_category
    ):
        tech = make_category("Technology")
        make_category("Business")
        post_program(client, category_ids=[tech], status=3)
        post_program(client, category_ids=[tech], status=3)
        post_program(client, category_ids=[tech], status=1)

        data = client.get(f"{DISCOVERY}/categories/").json()

        assert [(c["name"], c["program_count"]) for c in data] == [
            ("Technology", 2),
            ("Business", 0),
        ]
        popular = client.get(f"{DISCOVERY}/categories/popular?limit=1").json()
        assert [c["name"] for c in popular] == ["Technology"]

    def test_discovery_tags_search(self, client, make_tag):
        ai = make_tag("AI")
        make_tag("Startup")
        post_program(client, tag_ids=[ai])

        data = client.get(f"{DISCOVERY}/tags/", params={"search": "st"}).json()

        assert [t["name"] for t in data] == ["Startup"]
        assert client.get(f"{DISCOVERY}/tags/").json()[0] == {
            "id": str(ai),
            "name": "AI",
            "program_count": 1,
        }


class TestDiscovery:
    """Public discovery endpoints."""

    def test_unpublished_program_is_hidden(self, client):
        draft = post_program(client, status=1)

        assert client.get(f"{DISCOVERY}/programs/{draft['id']}").status_code == 404

    def test_get_published_program_counts_views(self, client):
        program = post_program(client)

        first = client.get(f"{DISCOVERY}/programs/{program['id']}")

        assert first.status_code == 200
        assert first.json()["view_count"] == 0
        assert client.get(f"{DISCOVERY}/programs/{program['id']}").json()["view_count"] == 1

    def test_concurrent_fetches_each_count_a_view(self, client):
        program = post_program(client)
        url = f"{DISCOVERY}/programs/{program['id']}"
        statuses = []

        def fetch():
            statuses.append(client.get(url).status_code)

        threads = [threading.Thread(target=fetch) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert statuses == [200] * 8
        assert client.get(f"{CMS}/programs/{program['id']}").json()["view_count"] == 8

    def test_search_forces_published_status(self, client):
        post_program(client, title="Live news", status=3)
        post_program(client, title="Draft news", status=1)

        data = client.get(f"{DISCOVERY}/search", params={"search_term": "news"}).json()

        assert [item["title"] for item in data["items"]] == ["Live news"]

    def test_search_filters_and_sorting(self, client, make_category):
        tech = make_category("Technology")
        post_program(client, title="Beta", category_ids=[tech], type=1)
        post_program(client, title="Alpha", category_ids=[tech], type=1)
        post_program(client, title="Gamma", type=1)
        post_program(client, title="Delta", category_ids=[tech], type=2)

        data = client.get(
            f"{DISCOVERY}/search",
            params={
                "type": 1,
                "category_ids": f"{tech},not-a-uuid",
                "sort_by": "Title",
                "sort_desc": "false",
            },
        ).json()

        assert [item["title"] for item in data["items"]] == ["Alpha", "Beta"]
        assert data["total_count"] == 2

    def test_search_date_range(self, client):
        post_program(client, title="January", published_date=datetime(2024, 1, 10))
        post_program(client, title="March", published_date=datetime(2024, 3, 10))

        data = client.get(
            f"{DISCOVERY}/search",
            params={"from_date": "2024-02-01T00:00:00", "to_date": "2024-12-31T00:00:00"},
        ).json()

        assert [item["title"] for item in data["items"]] == ["March"]

    def test_search_date_bounds_with_offsets(self, client):
        post_program(client, title="Noon UTC", published_date=datetime(2024, 1, 15, 12, 0))

        # 13:00+02:00 is 11:00 UTC
        data = client.get(
            f"{DISCOVERY}/search", params={"from_date": "2024-01-15T13:00:00+02:00"}
        ).json()

        assert data["total_count"] == 1

    def test_search_inverted_date_range_returns_400(self, client):
        response = client.get(
            f"{DISCOVERY}/search",
            params={"from_date": "2024-03-01T00:00:00", "to_date": "2024-01-01T00:00:00"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_failed"

    def test_search_huge_page_number_returns_empty_page(self, client):
        post_program(client)

        response = client.get(
            f"{DISCOVERY}/search", params={"page": "10000000000000000000"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["items"] == []
        assert data["total_count"] == 1

    def test_editorial_search_huge_page_number_returns_empty_page(self, client):
        response = client.post(f"{CMS}/programs/search", json={"page": 10**19})

        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_search_page_size_capped_at_50(self, client):
        data = client.get(f"{DISCOVERY}/search", params={"page_size": 500}).json()

        assert data["page_size"] == 50
        assert data["items"] == []
        assert data["total_pages"] == 1

    def test_search_pagination(self, client):
        for i in range(5):
            post_program(client, title=f"Program {i}")

        data = client.get(
            f"{DISCOVERY}/search", params={"page": 3, "page_size": 2}
        ).json()

        assert data["total_count"] == 5
        assert data["total_pages"] == 3
        assert len(data["items"]) == 1

    def test_search_results_are_cached(self, client):
        program = post_program(client, title="Original")
        first = client.get(f"{DISCOVERY}/search")

        put_program(client, program["id"], title="Renamed")
        second = client.get(f"{DISCOVERY}/search")

        assert second.content == first.content
        assert second.json()["items"][0]["title"] == "Original"

        # Different parameters miss the cache
        fresh = client.get(f"{DISCOVERY}/search", params={"page_size": 5})
        assert fresh.json()["items"][0]["title"] == "Renamed"

    def test_programs_by_category_and_tag(self, client, make_category, make_tag):
        tech = make_category("Technology")
        ai = make_tag("AI")
        post_program(
            client,
            title="Old",
            category_ids=[tech],
            tag_ids=[ai],
            published_date=datetime(2023, 1, 1),
        )
        post_program(
            client, title="New", category_ids=[tech], published_date=datetime(2024, 1, 1)
        )
        post_program(client, title="Hidden", category_ids=[tech], status=1)

        by_category = client.get(f"{DISCOVERY}/categories/{tech}/programs").json()
        by_tag = client.get(f"{DISCOVERY}/tags/{ai}/programs").json()

        assert [p["title"] for p in by_category["items"]] == ["New", "Old"]
        assert [p["title"] for p in by_tag["items"]] == ["Old"]

    def test_trending_orders_by_views(self, client):
        quiet = post_program(client, title="Quiet")
        popular = post_program(client, title="Popular")
        post_program(client, title="Unseen", status=1)
        counter = ViewCounter(SessionLocal)
        for _ in range(3):
            counter.record_view(uuid.UUID(popular["id"]))
        counter.record_view(uuid.UUID(quiet["id"]))

        data = client.get(f"{DISCOVERY}/trending", params={"count": 5}).json()

        assert [p["title"] for p in data] == ["Popular", "Quiet"]
        top = client.get(f"{DISCOVERY}/trending", params={"count": 1}).json()
        assert [p["title"] for p in top] == ["Popular"]

    def test_recent_orders_by_published_date(self, client):
        post_program(client, title="Older", published_date=datetime(2023, 6, 1))
        post_program(client, title="Newer", published_date=datetime(2024, 6, 1))

        data = client.get(f"{DISCOVERY}/recent").json()

        assert [p["title"] for p in data] == ["Newer", "Older"]


class TestComments:
    """Comment submission and moderation."""

    def _comment(self, client, program_id):
        return client.post(
            f"{DISCOVERY}/programs/{program_id}/comments",
            json={
                "content": "Great episode",
                "user_name": "viewer",
                "user_email": "viewer@example.com",
            },
        )

    def test_comment_hidden_until_approved(self, client):
        program = post_program(client)

        response = self._comment(client, program["id"])

        assert response.status_code == 201
        comment = response.json()
        assert comment["is_approved"] is False
        assert client.get(f"{CMS}/programs/{program['id']}").json()["comments"] == []

        approved = client.post(f"{CMS}/comments/{comment['id']}/approve")

        assert approved.status_code == 200
        comments = client.get(f"{CMS}/programs/{program['id']}").json()["comments"]
        assert [c["content"] for c in comments] == ["Great episode"]

    def test_comment_on_unpublished_program_returns_404(self, client):
        draft = post_program(client, status=1)

        assert self._comment(client, draft["id"]).status_code == 404

    def test_approve_missing_comment_returns_404(self, client):
        assert client.post(f"{CMS}/comments/{uuid.uuid4()}/approve").status_code == 404


class TestHealth:
    def test_health(self, client):
        data = client.get("/health").json()

        assert data["status"] == "healthy"
        assert data["database"] == "connected"
        assert data["cache"] == "connected"
