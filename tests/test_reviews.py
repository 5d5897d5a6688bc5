import pytest


def _review(client, api, reviewer, reviewee_id, rating, **extra):
    return client.post(
        api("/reviews"),
        json={"orderId": "ord-1", "revieweeId": reviewee_id, "rating": rating, **extra},
        headers=reviewer.headers,
    )


def test_review_updates_average_rating(client, api, buyer, supplier, make_user):
    res = _review(client, api, buyer, supplier.id, 5, comment="Great wheat")
    assert res.status_code == 200
    review = res.json()["review"]
    assert review["reviewerName"] == "Buyer-1"
    assert review["rating"] == 5

    other = make_user("buyer-2")
    _review(client, api, other, supplier.id, 2)

    profile = client.get(api(f"/users/{supplier.id}")).json()["user"]
    assert profile["rating"] == pytest.approx(3.5)


def test_fractional_rating_is_truncated(client, api, buyer, supplier):
    res = _review(client, api, buyer, supplier.id, "4.7")
    assert res.status_code == 200
    assert res.json()["review"]["rating"] == 4


@pytest.mark.parametrize("rating", [0, 6, -1])
def test_rating_out_of_range(client, api, buyer, supplier, rating):
    res = _review(client, api, buyer, supplier.id, rating)
    assert res.status_code == 400


def test_review_requires_fields(client, api, buyer):
    res = client.post(api("/reviews"), json={"rating": 4}, headers=buyer.headers)
    assert res.status_code == 400
    assert res.json()["error"] == "Order ID, reviewee, and rating required"


def test_review_for_user_without_profile(client, api, buyer):
    res = _review(client, api, buyer, "no-profile", 4)
    assert res.status_code == 200
    assert len(client.get(api("/reviews/no-profile")).json()["reviews"]) == 1


def test_reviews_scoped_to_reviewee(client, api, buyer, supplier, make_user):
    similar = make_user("supplier-10", role="supplier")
    _review(client, api, buyer, supplier.id, 4)
    _review(client, api, buyer, similar.id, 1)

    reviews = client.get(api(f"/reviews/{supplier.id}")).json()["reviews"]
    assert [r["revieweeId"] for r in reviews] == [supplier.id]


@pytest.mark.parametrize("raw_rating", ["Infinity", "NaN", "1e400"])
def test_non_finite_rating_is_rejected(client, api, buyer, supplier, raw_rating):
    body = '{"orderId":"ord-1","revieweeId":"%s","rating":%s}' % (supplier.id, raw_rating)
    res = client.post(
        api("/reviews"),
        content=body,
        headers={**buyer.headers, "Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["code"] == "validation_error"
    assert client.get(api(f"/reviews/{supplier.id}")).json()["reviews"] == []
