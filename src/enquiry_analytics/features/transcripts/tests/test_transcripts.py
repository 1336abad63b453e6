import datetime

from bson import ObjectId
from fastapi import status
from fastapi.testclient import TestClient

UTC = datetime.timezone.utc


def test_list_transcripts(client: TestClient, fake_store):
    transcript_id, model_id = ObjectId(), ObjectId()
    fake_store.rows["recent_transcripts"] = [
        {
            "_id": transcript_id,
            "user_info": {
                "name": "Asha",
                "contact": "555-0100",
                "date": datetime.datetime(2024, 3, 5, 9, 30, tzinfo=UTC),
                "interested_model": model_id,
                "location": "Pune",
            },
            "transcript": ["Hello", "Is the Roadster available?"],
            "__v": 0,
        },
        {"_id": ObjectId(), "transcript": []},
    ]

    response = client.get("/api/transcripts")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert len(body) == 2
    first = body[0]
    assert first["_id"] == str(transcript_id)
    assert first["user_info"]["interested_model"] == str(model_id)
    assert first["user_info"]["date"].startswith("2024-03-05T09:30:00")
    assert first["transcript"] == ["Hello", "Is the Roadster available?"]
    assert body[1]["user_info"] is None


def test_numeric_contact_is_read_as_text(client: TestClient, fake_store):
    fake_store.rows["recent_transcripts"] = [
        {"_id": ObjectId(), "user_info": {"name": "Ravi", "contact": 9876543210}, "transcript": ["Hi"]},
    ]

    response = client.get("/api/transcripts")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()[0]["user_info"]["contact"] == "9876543210"


def test_list_transcripts_is_capped_at_fifty(client: TestClient, fake_store):
    client.get("/api/transcripts")
    assert fake_store.calls == [("recent_transcripts", 50)]


def test_list_transcripts_failure_still_responds(client: TestClient, fake_store):
    fake_store.error = "not authorized on sales_enquiries"

    response = client.get("/api/transcripts")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.text == "not authorized on sales_enquiries"


def test_unreadable_transcript_document_is_500(client: TestClient, fake_store):
    fake_store.rows["recent_transcripts"] = [{"_id": ObjectId(), "transcript": "not a list"}]

    response = client.get("/api/transcripts")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.headers["content-type"].startswith("text/plain")
