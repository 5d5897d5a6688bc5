"""End-to-end marketplace scenarios across listings, orders and chat."""


def test_listing_to_confirmed_order(client, api, supplier, buyer, make_user):
    listing = client.post(
        api("/listings"),
        json={
            "crop": "Wheat",
            "quantity": 100,
            "unit": "kg",
            "pricePerUnit": 20,
            "mandi": "Agra Mandi",
        },
        headers=supplier.headers,
    ).json()["listing"]
    assert listing["status"] == "published"
    assert listing["supplierVerified"] is False

    order = client.post(
        api("/orders"),
        json={"listingId": listing["id"], "quantity": 10},
        headers=buyer.headers,
    ).json()["order"]
    assert order["totalAmount"] == 200
    assert order["status"] == "inquiry"

    path = api(f"/orders/{order['id']}")
    res = client.patch(path, json={"status": "confirmed"}, headers=supplier.headers)
    assert res.status_code == 200
    assert res.json()["order"]["status"] == "confirmed"

    stranger = make_user("stranger")
    res = client.patch(path, json={"status": "confirmed"}, headers=stranger.headers)
    assert res.status_code == 403


def test_chat_unread_cycle(client, api, buyer, supplier):
    sent = client.post(
        api("/messages"),
        json={"receiverId": supplier.id, "content": "Is the wheat still available?"},
        headers=buyer.headers,
    ).json()["message"]

    resent = client.post(
        api("/messages"),
        json={"receiverId": buyer.id, "content": "Yes"},
        headers=supplier.headers,
    ).json()["message"]
    assert resent["conversationId"] == sent["conversationId"]

    conversations = client.get(api("/messages"), headers=supplier.headers).json()[
        "conversations"
    ]
    assert conversations[0]["unreadCount"] == 1

    client.patch(
        api(f"/messages/{sent['id']}/read"),
        params={"conversationId": sent["conversationId"]},
        headers=supplier.headers,
    )
    conversations = client.get(api("/messages"), headers=supplier.headers).json()[
        "conversations"
    ]
    assert conversations[0]["unreadCount"] == 0


def test_order_review_and_dispute(client, api, supplier, buyer, admin, test_listing):
    order = client.post(
        api("/orders"),
        json={"listingId": test_listing["id"], "quantity": 4},
        headers=buyer.headers,
    ).json()["order"]
    for status in ("confirmed", "shipped", "delivered"):
        res = client.patch(
            api(f"/orders/{order['id']}"), json={"status": status}, headers=supplier.headers
        )
        assert res.status_code == 200

    client.post(
        api("/reviews"),
        json={"orderId": order["id"], "revieweeId": supplier.id, "rating": 4},
        headers=buyer.headers,
    )
    assert client.get(api(f"/users/{supplier.id}")).json()["user"]["rating"] == 4

    dispute = client.post(
        api("/disputes"),
        json={"orderId": order["id"], "reason": "Quality below grade"},
        headers=buyer.headers,
    ).json()["dispute"]
    res = client.patch(
        api(f"/disputes/{dispute['id']}"), json={"status": "rejected"}, headers=admin.headers
    )
    assert res.json()["dispute"]["status"] == "rejected"
