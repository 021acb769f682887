from __future__ import annotations

from sales_dashboard.models import SaleRecord
from sales_dashboard.services.realtime import RealtimeFeed, extract_record

ROW = {
    "id": 42,
    "valor_venda": 3500,
    "data_venda": "2025-01-05 10:00:00+00",
    "detalhes_tipoPagamento": "PIX",
    "id_pipedrive": None,
    "nome_parceiro": "Loja",
    "item_nome": "Split Gree 12000 BTUs",
}


def _feed() -> RealtimeFeed:
    return RealtimeFeed("https://example.supabase.co", "key", "vendas_parceiro")


def test_extract_record_shapes() -> None:
    assert extract_record({"data": {"record": ROW}}) == ROW
    assert extract_record({"new": ROW}) == ROW
    assert extract_record({"record": ROW}) == ROW
    assert extract_record({"data": {}}) is None
    assert extract_record("text") is None


def test_handle_payload_queues_records() -> None:
    feed = _feed()
    feed.handle_payload({"data": {"type": "INSERT", "record": ROW}})
    feed.handle_payload({"new": dict(ROW, id=43)})
    records = feed.drain()
    assert [r.id for r in records] == [42, 43]
    assert records[0] == SaleRecord(
        id=42,
        value=3500.0,
        sale_date="2025-01-05 10:00:00+00",
        payment_detail="PIX",
        partner_id=None,
        partner_name="Loja",
        item_name="Split Gree 12000 BTUs",
    )
    assert feed.drain() == []


def test_handle_payload_skips_malformed() -> None:
    feed = _feed()
    feed.handle_payload({"data": {"record": {"valor_venda": 10}}})
    feed.handle_payload({"data": {"record": dict(ROW, id="abc")}})
    feed.handle_payload(None)
    assert feed.drain() == []


def test_feed_not_running_until_started() -> None:
    feed = _feed()
    assert not feed.running
    feed.stop()
