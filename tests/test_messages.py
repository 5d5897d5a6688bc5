from farm_market.modules.messaging import derive_conversation_id


def _send(client, api, sender, receiver_id, content="Hello", **extra):
    return client.post(
        api("/messages"),
        json={"receiverId": receiver_id, "content": content, **extra},
        headers=sender.headers,
    )


def test_conversation_id_is_order_independent():
    assert derive_conversation_id("alice", "bob") == derive_conversation_id("bob", "alice")
    assert derive_conversation_id("bob", "alice") == "conv-alice-bob"


def test_send_derives_conversation_and_notifies(client, api, buyer, supplier):
    res = _send(client, api, buyer, supplier.id, offerPrice=18.5, orderId="ord-1")
    assert res.status_code == 200
    message = res.json()["message"]
    assert message["conversationId"] == derive_conversation_id(buyer.id, supplier.id)
    assert message["senderId"] == buyer.id
    assert message["read"] is False
    assert message["offerPrice"] == 18.5
    assert message["orderId"] == "ord-1"

    notifications = client.get(api("/notifications"), headers=supplier.headers).json()[
        "notifications"
    ]
    assert len(notifications) == 1
    assert notifications[0]["type"] == "message"
    assert notifications[0]["title"] == "New Message"
    assert notifications[0]["id"].startswith("notif-")


def test_send_requires_receiver_and_content(client, api, buyer, supplier):
    assert _send(client, api, buyer, supplier.id, content="   ").status_code == 400
    res = client.post(api("/messages"), json={"content": "hi"}, headers=buyer.headers)
    assert res.status_code == 400
    assert res.json()["error"] == "Receiver and content required"


def test_send_requires_auth(client, api):
    res = client.post(api("/messages"), json={"receiverId": "x", "content": "hi"})
    assert res.status_code == 401


def test_explicit_conversation_id_is_kept(client, api, buyer, supplier):
    message = _send(client, api, buyer, supplier.id, conversationId="conv-custom").json()[
        "message"
    ]
    assert message["conversationId"] == "conv-custom"


def test_unread_count_and_mark_read(client, api, buyer, supplier):
    message = _send(client, api, buyer, supplier.id).json()["message"]

    conversations = client.get(api("/messages"), headers=supplier.headers).json()[
        "conversations"
    ]
    assert len(conversations) == 1
    assert conversations[0]["conversationId"] == message["conversationId"]
    assert conversations[0]["unreadCount"] == 1
    assert conversations[0]["lastMessage"]["id"] == message["id"]

    # The sender has nothing unread in the same conversation.
    sender_view = client.get(api("/messages"), headers=buyer.headers).json()
    assert sender_view["conversations"][0]["unreadCount"] == 0

    res = client.patch(api(f"/messages/{message['id']}/read"), headers=supplier.headers)
    assert res.status_code == 200
    assert res.json()["message"]["read"] is True

    conversations = client.get(api("/messages"), headers=supplier.headers).json()[
        "conversations"
    ]
    assert conversations[0]["unreadCount"] == 0


def test_mark_read_with_conversation_id(client, api, buyer, supplier):
    message = _send(client, api, buyer, supplier.id).json()["message"]
    res = client.patch(
        api(f"/messages/{message['id']}/read"),
        params={"conversationId": message["conversationId"]},
        headers=supplier.headers,
    )
    assert res.status_code == 200
    assert res.json()["message"]["read"] is True

    wrong_conversation = client.patch(
        api(f"/messages/{message['id']}/read"),
        params={"conversationId": "conv-elsewhere"},
        headers=supplier.headers,
    )
    assert wrong_conversation.status_code == 404


def test_only_receiver_marks_read(client, api, buyer, supplier):
    message = _send(client, api, buyer, supplier.id).json()["message"]
    res = client.patch(api(f"/messages/{message['id']}/read"), headers=buyer.headers)
    assert res.status_code == 403


def test_mark_read_missing_message(client, api, supplier):
    res = client.patch(api("/messages/unknown/read"), headers=supplier.headers)
    assert res.status_code == 404


def test_conversation_messages_are_chronological_and_private(
    client, api, buyer, supplier, make_user
):
    first = _send(client, api, buyer, supplier.id, content="first").json()["message"]
    second = _send(client, api, supplier, buyer.id, content="second").json()["message"]
    assert first["conversationId"] == second["conversationId"]

    res = client.get(
        api("/messages"),
        params={"conversationId": first["conversationId"]},
        headers=buyer.headers,
    )
    assert [m["content"] for m in res.json()["messages"]] == ["first", "second"]

    outsider = make_user("outsider")
    res = client.get(
        api("/messages"),
        params={"conversationId": first["conversationId"]},
        headers=outsider.headers,
    )
    assert res.json() == {"messages": []}


def test_conversations_sorted_newest_first(client, api, buyer, supplier, make_user):
    other = make_user("farmer-2", role="supplier")
    _send(client, api, buyer, supplier.id, content="older")
    _send(client, api, buyer, other.id, content="newer")

    conversations = client.get(api("/messages"), headers=buyer.headers).json()[
        "conversations"
    ]
    assert [c["lastMessage"]["content"] for c in conversations] == ["newer", "older"]


def test_conversation_read_excludes_nested_conversation_ids(client, api, buyer, supplier):
    _send(client, api, buyer, supplier.id, content="outer", conversationId="c1")
    _send(client, api, buyer, supplier.id, content="nested", conversationId="c1:x")

    res = client.get(
        api("/messages"), params={"conversationId": "c1"}, headers=buyer.headers
    )
    messages = res.json()["messages"]
    assert [m["content"] for m in messages] == ["outer"]
    assert {m["conversationId"] for m in messages} == {"c1"}
