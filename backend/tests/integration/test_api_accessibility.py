"""Integration tests for simplify, alt-text and read-aloud endpoints."""

from tests.fixtures import SAMPLE_IMAGE_URL, SAMPLE_TEXT


class TestSimplify:
    def test_simplify(self, client, provider):
        provider.reply = "Cells make energy."

        response = client.post(
            "/api/simplify",
            json={
                "text": "Mitochondria generate adenosine triphosphate.",
                "readingLevel": "elementary",
            },
        )

        assert response.status_code == 200
        assert response.json() == {
            "original": "Mitochondria generate adenosine triphosphate.",
            "simplified": "Cells make energy.",
            "readingLevel": "elementary",
        }

    def test_default_reading_level_is_middle(self, client, provider):
        response = client.post("/api/simplify", json={"text": "Some text"})

        assert response.json()["readingLevel"] == "middle"
        messages, _ = provider.calls[0]
        assert "6th-8th grade" in messages[0].content

    def test_invalid_reading_level_rejected(self, client):
        response = client.post("/api/simplify", json={"text": "x", "readingLevel": "college"})

        assert response.status_code == 400

    def test_provider_failure_returns_500(self, client, provider):
        provider.should_fail = True

        response = client.post("/api/simplify", json={"text": "Some text"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to simplify text"}


class TestGenerateAltText:
    def test_generate_then_cache_hit(self, client, provider):
        provider.reply = "A tabby cat asleep on a sofa"

        first = client.post("/api/generate-alt-text", json={"imageUrl": SAMPLE_IMAGE_URL})
        second = client.post("/api/generate-alt-text", json={"imageUrl": SAMPLE_IMAGE_URL})

        assert first.status_code == 200
        assert first.json() == {"altText": "A tabby cat asleep on a sofa", "cached": False}
        assert second.json() == {"altText": "A tabby cat asleep on a sofa", "cached": True}
        assert len(provider.calls) == 1

    def test_use_cache_false_regenerates(self, client, provider):
        client.post("/api/generate-alt-text", json={"imageUrl": SAMPLE_IMAGE_URL})
        provider.reply = "Updated description"

        response = client.post(
            "/api/generate-alt-text", json={"imageUrl": SAMPLE_IMAGE_URL, "useCache": False}
        )

        assert response.json() == {"altText": "Updated description", "cached": False}
        assert len(provider.calls) == 2

    def test_submitted_url_used_verbatim(self, client, provider, storage):
        """The exact submitted string is the cache key and the provider input."""
        provider.reply = "first"
        client.post("/api/generate-alt-text", json={"imageUrl": "https://EXAMPLE.com"})
        provider.reply = "second"

        response = client.post("/api/generate-alt-text", json={"imageUrl": "https://example.com/"})

        assert response.json() == {"altText": "second", "cached": False}
        first_messages, _ = provider.calls[0]
        assert first_messages[1].content[1]["image_url"]["url"] == "https://EXAMPLE.com"
        assert storage.get_alt_text("https://EXAMPLE.com").alt_text == "first"
        assert storage.get_alt_text("https://example.com/").alt_text == "second"

    def test_encoded_url_not_rewritten(self, client, provider, storage):
        url = "https://cdn.example.com/img%2Fa.png?sig=A%2BB"

        client.post("/api/generate-alt-text", json={"imageUrl": url})

        messages, _ = provider.calls[0]
        assert messages[1].content[1]["image_url"]["url"] == url
        assert storage.get_alt_text(url) is not None

    def test_invalid_url_rejected(self, client):
        response = client.post("/api/generate-alt-text", json={"imageUrl": "not a url"})

        assert response.status_code == 400

    def test_provider_failure_returns_500(self, client, provider):
        provider.should_fail = True

        response = client.post("/api/generate-alt-text", json={"imageUrl": SAMPLE_IMAGE_URL})

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to generate alt text"}


class TestReadAloud:
    def test_word_timings(self, client):
        response = client.post(
            "/api/read-aloud", json={"text": SAMPLE_TEXT, "wordsPerMinute": 150}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["text"] == SAMPLE_TEXT
        assert data["wordsPerMinute"] == 150
        assert [t["startTime"] for t in data["wordTimings"]] == [0, 400, 800, 1200]
        assert [t["duration"] for t in data["wordTimings"]] == [400] * 4
        assert [t["word"] for t in data["wordTimings"]] == ["The", "quick", "brown", "fox"]
        assert data["totalDuration"] == 1600

    def test_default_rate(self, client):
        response = client.post("/api/read-aloud", json={"text": "one two"})

        assert response.json()["wordsPerMinute"] == 150
        assert response.json()["totalDuration"] == 800

    def test_rate_out_of_range_rejected(self, client):
        response = client.post("/api/read-aloud", json={"text": "hi", "wordsPerMinute": 20})

        assert response.status_code == 400
