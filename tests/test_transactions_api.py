import csv
import io
from decimal import Decimal

from core.models import Transaction

from helpers import ingest, tx_hash


def seed(db):
    ingest(db, 1, timestamp="2025-01-10T10:00:00Z", usd_rate=Decimal("2000"))
    ingest(db, 2, timestamp="2025-01-11T10:00:00Z", value="0", status="0x0")
    ingest(db, 3, timestamp="2025-01-12T10:00:00Z", chainId="8453",
           fromAddress="0x3333333333333333333333333333333333333333")


def test_list_is_newest_first_with_pagination(client, db):
    seed(db)

    response = client.get("/api/transactions", params={"limit": 2})

    assert response.status_code == 200
    data = response.json()["data"]
    assert [t["txHash"] for t in data["transactions"]] == [tx_hash(3), tx_hash(2)]
    assert data["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}

    page_two = client.get("/api/transactions", params={"limit": 2, "page": 2}).json()["data"]
    assert [t["txHash"] for t in page_two["transactions"]] == [tx_hash(1)]


def test_item_shape(client, db):
    seed(db)

    data = client.get("/api/transactions", params={"network": "ethereum", "type": "transfer"}).json()["data"]

    assert len(data["transactions"]) == 1
    item = data["transactions"][0]
    assert item["txHash"] == tx_hash(1)
    assert item["fromToken"] == {
        "symbol": "ETH",
        "address": "0x0000000000000000000000000000000000000000",
        "amount": "1000000000000000000",
        "decimals": 18,
    }
    assert item["toFiat"] == {"currency": "USD", "amount": 2000.0, "exchangeRate": 2000.0}
    assert item["gasFee"]["amount"] == "630000000000000"
    assert item["networkName"] == "Ethereum"
    assert item["explorerUrl"] == "https://etherscan.io/tx/" + tx_hash(1)
    assert item["user"]["walletAddress"] == "0x1111111111111111111111111111111111111111"
    assert item["user"]["role"] == "user"


def test_filters(client, db):
    seed(db)

    failed = client.get("/api/transactions", params={"status": "failed"}).json()["data"]
    assert [t["txHash"] for t in failed["transactions"]] == [tx_hash(2)]

    base = client.get("/api/transactions", params={"network": "base"}).json()["data"]
    assert [t["txHash"] for t in base["transactions"]] == [tx_hash(3)]

    user_id = db.query(Transaction).filter_by(tx_hash=tx_hash(3)).one().user_id
    mine = client.get("/api/transactions", params={"userId": user_id}).json()["data"]
    assert mine["pagination"]["total"] == 1


def test_invalid_query_is_bad_request(client):
    response = client.get("/api/transactions", params={"limit": 500})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    assert body["errors"][0]["field"] == "limit"

    assert client.get("/api/transactions", params={"status": "lost"}).status_code == 400


def test_unsupported_network_filter_is_bad_request(client):
    response = client.get("/api/transactions", params={"network": "solana"})

    assert response.status_code == 400
    assert response.json()["code"] == "UNSUPPORTED_NETWORK"
    assert client.get("/api/transactions/export", params={"network": "solana"}).status_code == 400


def test_empty_list(client):
    data = client.get("/api/transactions").json()["data"]

    assert data["transactions"] == []
    assert data["pagination"]["total"] == 0
    assert data["pagination"]["pages"] == 0


def test_get_single_transaction(client, db):
    seed(db)

    response = client.get(f"/api/transactions/{tx_hash(2)}")

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "failed"
    assert response.json()["data"]["toFiat"] is None


def test_get_unknown_transaction(client):
    response = client.get(f"/api/transactions/{tx_hash(42)}")

    assert response.status_code == 404
    assert response.json()["error"] == "Transaction not found"


def test_status_update(client, db):
    seed(db)

    response = client.patch(
        f"/api/transactions/{tx_hash(1)}/status",
        json={"status": "confirmed", "errorMessage": None},
    )

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "confirmed"
    assert db.query(Transaction).filter_by(tx_hash=tx_hash(1)).one().status == "confirmed"
    assert db.query(Transaction).count() == 3


def test_status_update_rejects_unknown_status(client, db):
    seed(db)

    response = client.patch(f"/api/transactions/{tx_hash(1)}/status", json={"status": "deleted"})

    assert response.status_code == 400


def test_csv_export(client, db):
    seed(db)

    response = client.get("/api/transactions/export", params={"network": "ethereum"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "transactions.csv" in response.headers["content-disposition"]

    rows = list(csv.DictReader(io.StringIO(response.text)))
    assert [r["txHash"] for r in rows] == [tx_hash(2), tx_hash(1)]
    assert rows[1]["tokenAmount"] == "1000000000000000000"
    assert rows[1]["gasFeeWei"] == "630000000000000"
    assert rows[0]["fiatAmount"] == ""
