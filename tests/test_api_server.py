"""
Pytest tests for the FakeCheck API (upload, analyze, check, dashboard, export).

Each test gets a fresh app from create_app(), so uploads never leak between tests.
"""

from __future__ import annotations

import csv
import io
import json

CSV_UPLOAD = (
    "username,email,email_verified,phone_verified,posts,followers,following,"
    "bio,profile_picture,full_name,website,location,created_at\n"
    "alice_w,alice@gmail.com,true,true,120,300,150,Photographer,https://x/a.jpg,Alice,https://a,Lisbon,2023-01-01\n"
    "bot123,x@mailinator.com,false,false,10,1,1,,https://x/a.jpg,,,,2023-01-01\n"
)


def _upload_json(client, records, filename="accounts.json"):
    return client.post(
        "/api/upload",
        files={"file": (filename, json.dumps(records), "application/json")},
    )


def _upload_csv(client, text=CSV_UPLOAD, filename="accounts.csv"):
    return client.post("/api/upload", files={"file": (filename, text, "text/csv")})


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_upload_json(client, account_factory):
    r = _upload_json(client, [account_factory(), account_factory(username="bob_k")])
    assert r.status_code == 200
    data = r.json()
    assert data["success"] is True
    assert data["count"] == 2
    assert data["message"] == "Successfully uploaded 2 accounts"


def test_upload_single_json_object(client, account_factory):
    r = _upload_json(client, account_factory())
    assert r.status_code == 200
    assert r.json()["count"] == 1


def test_upload_csv(client):
    r = _upload_csv(client)
    assert r.status_code == 200
    assert r.json()["count"] == 2


def test_upload_without_file(client):
    r = client.post("/api/upload", data={"note": "no file"})
    assert r.status_code == 400
    assert r.json() == {"detail": "No file uploaded"}


def test_upload_unsupported_extension(client):
    r = client.post("/api/upload", files={"file": ("accounts.txt", "hello", "text/plain")})
    assert r.status_code == 400
    assert "Unsupported file format" in r.json()["detail"]


def test_upload_invalid_json(client):
    r = client.post("/api/upload", files={"file": ("accounts.json", "{not json", "application/json")})
    assert r.status_code == 400
    assert r.json()["detail"].startswith("Failed to parse JSON file")


def test_upload_json_with_oversized_integer(client):
    body = '[{"username": "a", "posts": ' + "9" * 5000 + "}]"
    r = client.post("/api/upload", files={"file": ("a.json", body, "application/json")})
    assert r.status_code == 400
    assert r.json()["detail"].startswith("Failed to parse JSON file")


def test_upload_too_large(settings):
    from dataclasses import replace

    from fastapi.testclient import TestClient

    from backend_fakecheck.api_server.server import create_app

    small = TestClient(create_app(replace(settings, max_upload_bytes=10)))
    r = _upload_csv(small)
    assert r.status_code == 400
    assert r.json() == {"detail": "File too large"}


def test_analyze_without_upload(client):
    r = client.post("/api/analyze")
    assert r.status_code == 400
    assert r.json() == {"detail": "No data to analyze. Please upload data first."}


def test_analyze_flags_suspicious_accounts(client):
    _upload_csv(client)
    r = client.post("/api/analyze")
    assert r.status_code == 200
    data = r.json()
    assert data["summary"] == {"totalProcessed": 2, "totalFlagged": 1, "flaggedPercentage": "50.00"}
    [flagged] = data["flaggedAccounts"]
    assert flagged["username"] == "bot123"
    assert flagged["riskLevel"] == "HIGH"
    # username (2) + completeness (1) + duplicate picture (3) + metadata (4)
    assert flagged["suspicionScore"] == 10
    assert flagged["details"]["duplicateProfile"]["originalAccount"] == "alice_w"
    assert flagged["accountData"]["email"] == "x@mailinator.com"


def test_check_requires_username(client):
    r = client.post("/api/check", json={"username": "  "})
    assert r.status_code == 400
    assert r.json() == {"detail": "Username is required"}


def test_check_unknown_username(client):
    _upload_csv(client)
    r = client.post("/api/check", json={"username": "nobody"})
    assert r.status_code == 404
    assert r.json() == {"detail": "Account not found in uploaded data"}


def test_check_is_case_insensitive_and_isolated(client):
    _upload_csv(client)
    r = client.post("/api/check", json={"username": "BOT123"})
    assert r.status_code == 200
    data = r.json()
    assert data["account"]["username"] == "bot123"
    analysis = data["analysis"]
    # Single-account check: no other account to share a picture with.
    assert analysis["details"]["duplicateProfile"]["isSuspicious"] is False
    assert analysis["suspicionScore"] == 7
    assert analysis["riskLevel"] == "HIGH"


def test_dashboard_before_and_after_analysis(client):
    r = client.get("/api/dashboard")
    assert r.status_code == 200
    assert r.json()["stats"] == {"totalProcessed": 0, "totalFlagged": 0, "recentFlags": []}
    assert r.json()["recentActivity"] == []

    _upload_csv(client)
    client.post("/api/analyze")
    data = client.get("/api/dashboard").json()
    assert data["success"] is True
    assert data["stats"]["totalProcessed"] == 2
    assert data["stats"]["totalFlagged"] == 1
    assert [a["username"] for a in data["stats"]["recentFlags"]] == ["bot123"]
    assert [a["username"] for a in data["recentActivity"]] == ["bot123"]


def test_dashboard_recent_activity_is_capped(client, account_factory):
    records = [account_factory(username=f"fake{i}", email="a@yopmail.com") for i in range(12)]
    _upload_json(client, records)
    client.post("/api/analyze")
    data = client.get("/api/dashboard").json()
    assert data["stats"]["totalFlagged"] == 12
    assert [a["username"] for a in data["stats"]["recentFlags"]] == [f"fake{i}" for i in range(2, 12)]
    assert [a["username"] for a in data["recentActivity"]] == [f"fake{i}" for i in range(7, 12)]


def test_export_without_flagged(client):
    r = client.get("/api/export")
    assert r.status_code == 400
    assert r.json() == {"detail": "No flagged accounts to export"}


def test_export_csv(client):
    _upload_csv(client)
    client.post("/api/analyze")
    r = client.get("/api/export")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert r.headers["content-disposition"] == 'attachment; filename="flagged_accounts.csv"'

    lines = r.text.splitlines()
    assert lines[0] == (
        "Username,Email,Followers,Following,Posts,Account Age (days),Suspicion Score,Risk Level,Flags"
    )
    assert lines[1].startswith('"bot123","x@mailinator.com","1","1","10",')
    row = next(csv.reader(io.StringIO(lines[1])))
    assert row[6] == "10"
    assert row[7] == "HIGH"
    assert row[8].split(";")[:2] == [
        "Low profile completeness: 20%",
        "Suspicious username pattern: 'bot' followed by digits",
    ]


def test_apps_do_not_share_state(settings, account_factory):
    from fastapi.testclient import TestClient

    from backend_fakecheck.api_server.server import create_app

    first = TestClient(create_app(settings))
    second = TestClient(create_app(settings))
    _upload_json(first, [account_factory()])
    assert first.post("/api/analyze").status_code == 200
    assert second.post("/api/analyze").status_code == 400


def test_cors_allows_configured_origin(settings):
    from dataclasses import replace

    from fastapi.testclient import TestClient

    from backend_fakecheck.api_server.server import create_app

    app = create_app(replace(settings, cors_allow_origins=("http://localhost:3000",)))
    r = TestClient(app).get("/health", headers={"Origin": "http://localhost:3000"})
    assert r.headers["access-control-allow-origin"] == "http://localhost:3000"
    r = TestClient(app).get("/health", headers={"Origin": "http://evil.example"})
    assert "access-control-allow-origin" not in r.headers
