from datetime import timedelta

from app.db.models.enums import ProfileVisibilityEnum, SkillTypeEnum
from app.utils.clock import utcnow

API = "/api/v1"


def headers(user):
    return {"X-User-ID": user.id}


def _send_request(client, pair, **extra):
    body = {
        "receiverId": pair["receiver"].id,
        "offeredSkillId": pair["offered"].id,
        "requestedSkillId": pair["requested"].id,
    }
    body.update(extra)
    return client.post(f"{API}/swaps", json=body, headers=headers(pair["sender"]))


def test_health(client):
    response = client.get(f"{API}/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "liveConnections": 0}


def test_missing_identity_is_unauthorized(client):
    response = client.get(f"{API}/swaps")
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_unknown_identity_is_unauthorized(client):
    response = client.get(f"{API}/swaps", headers={"X-User-ID": "ghost"})
    assert response.status_code == 401


def test_swap_happy_path_through_feedback(client, barter_pair):
    sender, receiver = barter_pair["sender"], barter_pair["receiver"]

    created = _send_request(client, barter_pair, message="Let's trade")
    assert created.status_code == 201
    body = created.json()
    assert body["success"] is True
    assert body["message"] == "Swap request sent successfully"
    swap = body["data"]["swapRequest"]
    assert swap["status"] == "PENDING"
    assert swap["sender"]["firstName"] == "Sam"
    assert swap["requestedSkill"]["name"] == "Photography"

    when = (utcnow() + timedelta(days=2)).isoformat()
    accepted = client.put(
        f"{API}/swaps/{swap['id']}/status",
        json={"status": "ACCEPTED", "scheduledDate": when},
        headers=headers(receiver),
    )
    assert accepted.status_code == 200
    assert accepted.json()["data"]["swapRequest"]["status"] == "ACCEPTED"
    assert accepted.json()["data"]["swapRequest"]["scheduledDate"] is not None

    completed = client.put(
        f"{API}/swaps/{swap['id']}/status", json={"status": "COMPLETED"}, headers=headers(sender)
    )
    assert completed.json()["data"]["swapRequest"]["status"] == "COMPLETED"

    feedback = client.post(
        f"{API}/feedback",
        json={"swapRequestId": swap["id"], "rating": 5, "comment": "Patient and clear"},
        headers=headers(sender),
    )
    assert feedback.status_code == 201
    assert feedback.json()["data"]["feedback"]["rating"] == 5

    duplicate = client.post(
        f"{API}/feedback", json={"swapRequestId": swap["id"], "rating": 4}, headers=headers(sender)
    )
    assert duplicate.status_code == 400

    ratings = client.get(f"{API}/feedback/user/{receiver.id}", headers=headers(sender)).json()["data"]
    assert ratings["stats"] == {"averageRating": 5.0, "totalReviews": 1}
    assert len(ratings["feedback"]) == 1

    detail = client.get(f"{API}/swaps/{swap['id']}", headers=headers(receiver)).json()["data"]["swapRequest"]
    assert [f["rating"] for f in detail["feedback"]] == [5]


def test_duplicate_pending_request_is_rejected(client, barter_pair):
    assert _send_request(client, barter_pair).status_code == 201

    second = _send_request(client, barter_pair)
    assert second.status_code == 400
    assert second.json()["message"] == "There is already a pending swap request between you and this user"


def test_private_receiver_is_forbidden(client, barter_pair, db):
    barter_pair["receiver"].profile_visibility = ProfileVisibilityEnum.PRIVATE
    db.commit()

    response = _send_request(client, barter_pair)
    assert response.status_code == 403


def test_request_validation_errors(client, barter_pair):
    missing = client.post(
        f"{API}/swaps", json={"receiverId": barter_pair["receiver"].id}, headers=headers(barter_pair["sender"])
    )
    assert missing.status_code == 400
    body = missing.json()
    assert body["success"] is False
    assert body["message"] == "Validation error"
    assert {e["field"] for e in body["errors"]} >= {"offeredSkillId", "requestedSkillId"}

    unknown_field = _send_request(client, barter_pair, priority="high")
    assert unknown_field.status_code == 400


def test_unknown_status_value_is_a_validation_error(client, barter_pair):
    swap = _send_request(client, barter_pair).json()["data"]["swapRequest"]
    response = client.put(
        f"{API}/swaps/{swap['id']}/status", json={"status": "PENDING"}, headers=headers(barter_pair["receiver"])
    )
    assert response.status_code == 400


def test_wrong_party_and_outsider(client, barter_pair, make_user):
    swap = _send_request(client, barter_pair).json()["data"]["swapRequest"]
    url = f"{API}/swaps/{swap['id']}/status"

    by_sender = client.put(url, json={"status": "ACCEPTED"}, headers=headers(barter_pair["sender"]))
    assert by_sender.status_code == 403

    outsider = make_user("Olly")
    assert client.put(url, json={"status": "ACCEPTED"}, headers=headers(outsider)).status_code == 404
    assert client.get(f"{API}/swaps/{swap['id']}", headers=headers(outsider)).status_code == 404


def test_past_schedule_is_rejected(client, barter_pair):
    swap = _send_request(client, barter_pair).json()["data"]["swapRequest"]
    yesterday = (utcnow() - timedelta(days=1)).isoformat()

    response = client.put(
        f"{API}/swaps/{swap['id']}/status",
        json={"status": "ACCEPTED", "scheduledDate": yesterday},
        headers=headers(barter_pair["receiver"]),
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Scheduled date must be in the future"

    still_pending = client.get(f"{API}/swaps/{swap['id']}", headers=headers(barter_pair["sender"]))
    assert still_pending.json()["data"]["swapRequest"]["status"] == "PENDING"


def test_cancel_then_delete(client, barter_pair):
    swap = _send_request(client, barter_pair).json()["data"]["swapRequest"]
    url = f"{API}/swaps/{swap['id']}"

    assert client.delete(f"{url}/delete", headers=headers(barter_pair["sender"])).status_code == 404
    assert client.delete(url, headers=headers(barter_pair["receiver"])).status_code == 403

    cancelled = client.delete(url, headers=headers(barter_pair["sender"]))
    assert cancelled.status_code == 200
    assert cancelled.json() == {"success": True, "message": "Swap request cancelled successfully"}

    assert client.delete(url, headers=headers(barter_pair["sender"])).status_code == 400

    assert client.delete(f"{url}/delete", headers=headers(barter_pair["receiver"])).status_code == 200
    assert client.get(url, headers=headers(barter_pair["sender"])).status_code == 404


def test_list_swaps_with_filters(client, barter_pair):
    _send_request(client, barter_pair)
    sender, receiver = barter_pair["sender"], barter_pair["receiver"]

    sent = client.get(f"{API}/swaps", params={"type": "sent"}, headers=headers(sender)).json()["data"]
    assert len(sent["swapRequests"]) == 1
    assert sent["pagination"] == {"total": 1, "limit": 20, "offset": 0, "hasMore": False}

    received = client.get(f"{API}/swaps", params={"type": "received"}, headers=headers(sender)).json()["data"]
    assert received["swapRequests"] == []

    pending = client.get(f"{API}/swaps", params={"status": "PENDING"}, headers=headers(receiver)).json()["data"]
    assert len(pending["swapRequests"]) == 1


def test_receiver_gets_live_notification(client, barter_pair):
    receiver = barter_pair["receiver"]
    with client.websocket_connect(f"{API}/notifications/ws?user_id={receiver.id}") as ws:
        assert _send_request(client, barter_pair).status_code == 201
        event = ws.receive_json()

    assert event["event"] == "notification"
    assert event["message"] == "New swap request received"
    assert event["data"]["type"] == "NEW_SWAP_REQUEST"
    assert event["data"]["swapRequest"]["receiverId"] == receiver.id


def test_skill_catalog(client, make_user, make_skill, give_skill):
    author = make_user("Ada")
    python = make_skill("Python", "Programming")
    make_skill("Guitar", "Music")
    give_skill(author, python)

    created = client.post(
        f"{API}/skills",
        json={"name": "Basket Weaving", "category": "Crafts"},
        headers=headers(author),
    )
    assert created.status_code == 201
    assert created.json()["data"]["skill"]["isCustom"] is True

    duplicate = client.post(
        f"{API}/skills", json={"name": "python", "category": "Programming"}, headers=headers(author)
    )
    assert duplicate.status_code == 400

    listing = client.get(f"{API}/skills").json()["data"]
    # Predefined skills first, then custom ones
    assert [s["name"] for s in listing["skills"]] == ["Guitar", "Python", "Basket Weaving"]
    assert listing["categories"] == ["Crafts", "Music", "Programming"]

    popular = client.get(f"{API}/skills/popular", params={"limit": 1}).json()["data"]["skills"]
    assert popular[0]["name"] == "Python"
    assert popular[0]["userCount"] == 1

    found = client.get(f"{API}/skills/search", params={"query": "gui"}).json()["data"]["skills"]
    assert [s["name"] for s in found] == ["Guitar"]

    assert client.get(f"{API}/skills/{python.id}").json()["data"]["skill"]["userCount"] == 1
    assert client.get(f"{API}/skills/missing").status_code == 404


def test_profile_and_search(client, make_user, make_skill, give_skill):
    me = make_user("Maya", location="Lisbon")
    other = make_user("Nico", location="Porto")
    cooking = make_skill("Cooking", "Life Skills")
    give_skill(other, cooking)

    updated = client.put(
        f"{API}/users/profile",
        json={"bio": "Home cook", "isAvailable": False},
        headers=headers(me),
    )
    assert updated.status_code == 200
    profile = updated.json()["data"]["user"]
    assert profile["bio"] == "Home cook"
    assert profile["isAvailable"] is False
    assert profile["location"] == "Lisbon"

    results = client.get(
        f"{API}/users/search", params={"skill": "cook"}, headers=headers(me)
    ).json()["data"]["users"]
    assert [u["firstName"] for u in results] == ["Nico"]

    public = client.get(f"{API}/users/{other.id}", headers=headers(me))
    assert public.status_code == 200
    assert "email" not in public.json()["data"]["user"]


def test_private_profile_is_hidden(client, make_user):
    viewer = make_user("Vera")
    hidden = make_user("Hal", profile_visibility=ProfileVisibilityEnum.PRIVATE)

    assert client.get(f"{API}/users/{hidden.id}", headers=headers(viewer)).status_code == 403
    assert client.get(f"{API}/users/{hidden.id}", headers=headers(hidden)).status_code == 200
    assert client.get(f"{API}/feedback/user/{hidden.id}", headers=headers(viewer)).status_code == 403


def test_user_skills_and_availability(client, make_user, make_skill):
    me = make_user("Leo")
    chess = make_skill("Chess", "Games")

    body = {"skillId": chess.id, "skillType": SkillTypeEnum.OFFERED.value, "level": 4}
    added = client.post(f"{API}/users/skills", json=body, headers=headers(me))
    assert added.status_code == 201
    user_skill_id = added.json()["data"]["userSkill"]["id"]

    assert client.post(f"{API}/users/skills", json=body, headers=headers(me)).status_code == 400
    assert client.post(
        f"{API}/users/skills", json={**body, "level": 9}, headers=headers(me)
    ).status_code == 400

    assert client.delete(f"{API}/users/skills/{user_skill_id}", headers=headers(me)).status_code == 200
    assert client.delete(f"{API}/users/skills/{user_skill_id}", headers=headers(me)).status_code == 404

    bad_time = client.post(
        f"{API}/users/availability",
        json={"availabilityType": "EVENINGS", "startTime": "25:00"},
        headers=headers(me),
    )
    assert bad_time.status_code == 400

    slot = client.post(
        f"{API}/users/availability",
        json={"availabilityType": "WEEKENDS", "startTime": "09:00", "endTime": "12:30", "daysOfWeek": ["saturday"]},
        headers=headers(me),
    )
    assert slot.status_code == 201
    assert slot.json()["data"]["availability"]["daysOfWeek"] == ["saturday"]


def test_feedback_update_accepts_resent_swap_id(client, barter_pair):
    sender, receiver = barter_pair["sender"], barter_pair["receiver"]
    swap = _send_request(client, barter_pair).json()["data"]["swapRequest"]
    url = f"{API}/swaps/{swap['id']}/status"
    client.put(url, json={"status": "ACCEPTED"}, headers=headers(receiver))
    client.put(url, json={"status": "COMPLETED"}, headers=headers(receiver))
    feedback = client.post(
        f"{API}/feedback", json={"swapRequestId": swap["id"], "rating": 3}, headers=headers(sender)
    ).json()["data"]["feedback"]

    updated = client.put(
        f"{API}/feedback/{feedback['id']}",
        json={"swapRequestId": swap["id"], "rating": 4, "comment": "Second session was better"},
        headers=headers(sender),
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["feedback"]["rating"] == 4
    assert updated.json()["data"]["feedback"]["swapRequestId"] == swap["id"]

    out_of_range = client.put(
        f"{API}/feedback/{feedback['id']}", json={"rating": 6}, headers=headers(sender)
    )
    assert out_of_range.status_code == 400


def test_notification_socket_identifies_caller_from_header(client, barter_pair):
    receiver = barter_pair["receiver"]
    with client.websocket_connect(
        f"{API}/notifications/ws", headers={"X-User-ID": f"{receiver.id}, proxy-appended"}
    ) as ws:
        assert _send_request(client, barter_pair).status_code == 201
        event = ws.receive_json()

    assert event["data"]["type"] == "NEW_SWAP_REQUEST"
    assert event["data"]["swapRequest"]["receiverId"] == receiver.id
