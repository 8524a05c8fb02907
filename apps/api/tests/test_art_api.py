"""Art upload, placement, comment and vote API tests."""

from __future__ import annotations

import os
import unittest

from fastapi.testclient import TestClient

from emblem.adapters.storage import InMemoryObjectStore
from emblem.core.config import get_settings
from emblem.domain.geo import get_sector
from emblem.errors import ApiError
from emblem.main import create_app
from emblem.repositories.memory import InMemoryStore
from emblem.services.art import ArtService

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-data"


class _SettingsEnvCase(unittest.TestCase):
    _env_keys = ("EMBLEM_AUTH_PROVIDER", "EMBLEM_STORAGE_BUCKET", "EMBLEM_STORAGE_PUBLIC_BASE_URL")

    def setUp(self) -> None:
        self._old_env = {k: os.environ.get(k) for k in self._env_keys}
        os.environ["EMBLEM_AUTH_PROVIDER"] = "mock"
        os.environ["EMBLEM_STORAGE_BUCKET"] = "emblem-test"
        os.environ.pop("EMBLEM_STORAGE_PUBLIC_BASE_URL", None)
        get_settings.cache_clear()

    def tearDown(self) -> None:
        for key, value in self._old_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_settings.cache_clear()


class ArtApiTests(_SettingsEnvCase):
    owner_headers = {"Authorization": "Bearer test:artist"}
    other_headers = {"Authorization": "Bearer test:visitor"}

    def _upload(self, client: TestClient, headers: dict[str, str] | None = None) -> dict:
        response = client.post(
            "/api/v1/art",
            headers={**(headers or self.owner_headers), "File-Type": "image/png"},
            content=PNG_BYTES,
        )
        self.assertEqual(response.status_code, 201)
        return response.json()

    def test_upload_stores_asset_and_returns_public_url(self) -> None:
        app = create_app()
        client = TestClient(app)

        art = self._upload(client)

        self.assertEqual(art["type"], "image/png")
        self.assertEqual(art["owner_id"], "artist")
        self.assertEqual(art["upvotes"], 0)
        self.assertEqual(art["downvotes"], 0)
        self.assertEqual(art["url"], f"https://s3.amazonaws.com/emblem-test/{art['id']}")
        stored = app.state.object_store.get(art["id"])
        self.assertIsNotNone(stored)
        assert stored is not None
        self.assertEqual(stored.data, PNG_BYTES)
        self.assertEqual(stored.content_type, "image/png")

    def test_upload_requires_authentication(self) -> None:
        app = create_app()
        client = TestClient(app)

        response = client.post("/api/v1/art", headers={"File-Type": "image/png"}, content=PNG_BYTES)

        self.assertEqual(response.status_code, 401)
        self.assertEqual(app.state.store.art_write_count, 0)
        self.assertEqual(app.state.object_store.objects, {})

    def test_upload_requires_file_type_and_payload(self) -> None:
        app = create_app()
        client = TestClient(app)

        missing_type = client.post("/api/v1/art", headers=self.owner_headers, content=PNG_BYTES)
        empty_body = client.post("/api/v1/art", headers={**self.owner_headers, "File-Type": "image/png"})

        self.assertEqual(missing_type.status_code, 400)
        self.assertEqual(missing_type.json()["code"], "VALIDATION_ERROR")
        self.assertEqual(empty_body.status_code, 400)
        self.assertEqual(app.state.store.art_write_count, 0)

    def test_multipart_upload_stores_file_part(self) -> None:
        cases = [
            {**self.owner_headers, "File-Type": "image/png"},
            self.owner_headers,
        ]
        for headers in cases:
            with self.subTest(headers=headers):
                app = create_app()
                client = TestClient(app)

                response = client.post(
                    "/api/v1/art",
                    headers=headers,
                    files={"file": ("art.png", PNG_BYTES, "image/png")},
                )

                self.assertEqual(response.status_code, 201)
                art = response.json()
                self.assertEqual(art["type"], "image/png")
                stored = app.state.object_store.get(art["id"])
                assert stored is not None
                self.assertEqual(stored.data, PNG_BYTES)

    def test_multipart_upload_accepts_form_token(self) -> None:
        app = create_app()
        client = TestClient(app)

        response = client.post(
            "/api/v1/art",
            data={"access_token": "test:form-artist"},
            files={"file": ("art.png", PNG_BYTES, "image/png")},
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["owner_id"], "form-artist")

    def test_storage_failure_returns_502_and_discards_record(self) -> None:
        app = create_app()
        app.state.object_store.failure_message = "bucket unavailable"
        client = TestClient(app)

        response = client.post(
            "/api/v1/art",
            headers={**self.owner_headers, "File-Type": "image/png"},
            content=PNG_BYTES,
        )

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["code"], "STORAGE_UPLOAD_FAILED")
        self.assertEqual(app.state.store.arts, {})

    def test_list_get_and_download(self) -> None:
        app = create_app()
        client = TestClient(app)
        first = self._upload(client)
        second = self._upload(client, self.other_headers)

        listed = client.get("/api/v1/art")
        self.assertEqual(listed.status_code, 200)
        self.assertEqual([art["id"] for art in listed.json()], [first["id"], second["id"]])

        loaded = client.get(f"/api/v1/art/{first['id']}")
        self.assertEqual(loaded.status_code, 200)
        self.assertEqual(loaded.json()["owner_id"], "artist")

        downloaded = client.get(f"/api/v1/art/{first['id']}/download")
        self.assertEqual(downloaded.status_code, 200)
        self.assertEqual(downloaded.content, PNG_BYTES)
        self.assertEqual(downloaded.headers["content-type"], "image/png")

    def test_missing_art_returns_no_leak_404(self) -> None:
        app = create_app()
        client = TestClient(app)

        for path in ("/api/v1/art/missing", "/api/v1/art/missing/download", "/api/v1/art/missing/votes"):
            with self.subTest(path=path):
                response = client.get(path)
                self.assertEqual(response.status_code, 404)
                self.assertEqual(response.json(), {"code": "RESOURCE_NOT_FOUND", "message": "Resource not found"})

    def test_delete_is_owner_scoped_and_removes_asset(self) -> None:
        app = create_app()
        client = TestClient(app)
        art = self._upload(client)
        client.post(f"/api/v1/art/{art['id']}/comments", headers=self.other_headers, json={"title": "Wow"})

        cross_owner = client.delete(f"/api/v1/art/{art['id']}", headers=self.other_headers)
        self.assertEqual(cross_owner.status_code, 404)
        self.assertIsNotNone(app.state.store.get_art(art["id"]))

        deleted = client.delete(f"/api/v1/art/{art['id']}", headers=self.owner_headers)
        self.assertEqual(deleted.status_code, 204)
        self.assertIsNone(app.state.store.get_art(art["id"]))
        self.assertIsNone(app.state.object_store.get(art["id"]))
        self.assertEqual(app.state.store.comments, {})

    def test_delete_storage_failure_keeps_record(self) -> None:
        app = create_app()
        client = TestClient(app)
        art = self._upload(client)
        client.post(f"/api/v1/art/{art['id']}/comments", headers=self.other_headers, json={"title": "Wow"})
        app.state.object_store.failure_message = "bucket unavailable"

        response = client.delete(f"/api/v1/art/{art['id']}", headers=self.owner_headers)

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["code"], "STORAGE_DELETE_FAILED")
        self.assertIsNotNone(app.state.store.get_art(art["id"]))
        self.assertEqual(len(app.state.store.comments), 1)
        self.assertEqual(client.get(f"/api/v1/art/{art['id']}").status_code, 200)
        self.assertEqual(client.get(f"/api/v1/art/{art['id']}/download").content, PNG_BYTES)

    def test_place_reuses_sector_place(self) -> None:
        app = create_app()
        client = TestClient(app)
        first = self._upload(client)
        second = self._upload(client)

        placed_first = client.post(
            f"/api/v1/art/{first['id']}/place",
            headers=self.owner_headers,
            json={"lat": 37.78361, "long": -122.40901},
        )
        placed_second = client.post(
            f"/api/v1/art/{second['id']}/place",
            headers=self.owner_headers,
            json={"lat": 37.78369, "long": -122.40909},
        )

        self.assertEqual(placed_first.status_code, 200)
        self.assertEqual(placed_second.status_code, 200)
        self.assertEqual(len(app.state.store.places), 1)
        self.assertEqual(placed_first.json()["place_ids"], placed_second.json()["place_ids"])

        in_sector = client.get("/api/v1/places/37.783:-122.409/art")
        self.assertEqual([art["id"] for art in in_sector.json()], [first["id"], second["id"]])

    def test_places_for_art_are_listed(self) -> None:
        app = create_app()
        client = TestClient(app)
        art = self._upload(client)
        client.post(
            f"/api/v1/art/{art['id']}/place",
            headers=self.owner_headers,
            json={"lat": 37.78361, "long": -122.40901},
        )

        response = client.get(f"/api/v1/art/{art['id']}/places")

        self.assertEqual(response.status_code, 200)
        places = response.json()
        self.assertEqual(len(places), 1)
        self.assertEqual(places[0]["sector"], "37.783:-122.409")
        self.assertEqual(places[0]["lat"], 37.78361)
        self.assertEqual(places[0]["long"], -122.40901)
        self.assertEqual(client.get("/api/v1/art/missing/places").status_code, 404)

    def test_place_rejects_out_of_range_coordinates(self) -> None:
        app = create_app()
        client = TestClient(app)
        art = self._upload(client)

        response = client.post(
            f"/api/v1/art/{art['id']}/place",
            headers=self.owner_headers,
            json={"lat": 91, "long": 0},
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "VALIDATION_ERROR")

    def test_comments_are_attributed_and_ordered(self) -> None:
        app = create_app()
        client = TestClient(app)
        art = self._upload(client)

        first = client.post(f"/api/v1/art/{art['id']}/comments", headers=self.other_headers, json={"title": "First"})
        second = client.post(f"/api/v1/art/{art['id']}/comments", headers=self.owner_headers, json={"title": "Second"})
        self.assertEqual(first.status_code, 201)
        self.assertEqual(first.json()["author_id"], "visitor")
        self.assertEqual(second.status_code, 201)

        listed = client.get(f"/api/v1/art/{art['id']}/comments")
        self.assertEqual([comment["title"] for comment in listed.json()], ["First", "Second"])

    def test_votes_increment_counters(self) -> None:
        app = create_app()
        client = TestClient(app)
        art = self._upload(client)

        for value in (1, 1, -1):
            response = client.post(f"/api/v1/art/{art['id']}/votes", headers=self.other_headers, json={"vote": value})
            self.assertEqual(response.status_code, 201)
            self.assertEqual(response.json()["voter_id"], "visitor")

        loaded = client.get(f"/api/v1/art/{art['id']}").json()
        self.assertEqual(loaded["upvotes"], 2)
        self.assertEqual(loaded["downvotes"], 1)
        votes = client.get(f"/api/v1/art/{art['id']}/votes").json()
        self.assertEqual([vote["value"] for vote in votes], [1, 1, -1])

    def test_vote_value_must_be_plus_or_minus_one(self) -> None:
        app = create_app()
        client = TestClient(app)
        art = self._upload(client)

        response = client.post(f"/api/v1/art/{art['id']}/votes", headers=self.other_headers, json={"vote": 5})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(app.state.store.vote_write_count, 0)


class ArtServiceUnitTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryStore()
        self.objects = InMemoryObjectStore("https://assets.example.test/art/")
        self.service = ArtService(self.store, self.objects)

    def test_public_url_uses_configured_base(self) -> None:
        art = self.service.upload_art(owner_id="user-a", content_type="image/gif", data=b"GIF89a")

        self.assertEqual(art.url, f"https://assets.example.test/art/{art.id}")

    def test_operations_on_missing_art_raise_not_found(self) -> None:
        with self.assertRaises(ApiError) as context:
            self.service.add_comment(art_id="missing", author_id="user-a", title="Hi")
        self.assertEqual(context.exception.status_code, 404)
        self.assertEqual(context.exception.payload.code, "RESOURCE_NOT_FOUND")

    def test_placing_twice_in_same_sector_links_once(self) -> None:
        art = self.service.upload_art(owner_id="user-a", content_type="image/png", data=PNG_BYTES)

        self.service.place_art(art_id=art.id, lat=10.0001, long=20.0001)
        placed = self.service.place_art(art_id=art.id, lat=10.0009, long=20.0009)

        self.assertEqual(len(placed.place_ids), 1)

    def test_delete_does_not_drop_record_when_storage_fails(self) -> None:
        art = self.service.upload_art(owner_id="user-a", content_type="image/png", data=PNG_BYTES)
        self.objects.failure_message = "bucket unavailable"

        with self.assertRaises(ApiError) as context:
            self.service.delete_art(owner_id="user-a", art_id=art.id)

        self.assertEqual(context.exception.status_code, 502)
        self.assertIsNotNone(self.store.get_art(art.id))


class SectorTests(unittest.TestCase):
    def test_truncates_toward_zero(self) -> None:
        self.assertEqual(get_sector(37.78369, -122.40909), "37.783:-122.409")
        self.assertEqual(get_sector(-0.0004, 0.0009), "0.000:0.000")

    def test_pads_to_fixed_precision(self) -> None:
        self.assertEqual(get_sector(40.7, -74), "40.700:-74.000")


if __name__ == "__main__":
    unittest.main()
