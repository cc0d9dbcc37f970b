from __future__ import annotations

from invoicer.data.payment_methods import (
    BankIBAN,
    BankUS,
    CardLink,
    Crypto,
    CryptoKind,
    Other,
    PayPal,
    decode,
    encode,
    is_payment_method,
)


def test_encode_shape() -> None:
    data = encode(BankIBAN(iban="DE89", swift="COBADEFF"))
    assert data == {"kind": "bankIBAN", "payload": {"iban": "DE89", "swift": "COBADEFF", "beneficiary": ""}}


def test_decode_restores_variants() -> None:
    methods = [
        BankIBAN(iban="DE89", swift="COBADEFF", beneficiary="Northwind"),
        BankUS(account="1", routing="2", bank_name="First"),
        PayPal(email="p@q.example"),
        CardLink(url="https://pay.example"),
        Crypto(crypto=CryptoKind.ETH, address="0xabc", memo="ref 9"),
        Other(name="Cheque", details="Payable to Northwind"),
    ]
    assert [decode(encode(m)) for m in methods] == methods


def test_decode_blank_optionals_become_none() -> None:
    m = decode({"kind": "bankUS", "payload": {"account": "1", "routing": "2", "bankName": "  "}})
    assert m == BankUS(account="1", routing="2", bank_name=None)


def test_decode_unknown_crypto_falls_back_to_btc() -> None:
    m = decode({"kind": "crypto", "payload": {"kind": "DOGE", "address": "D123"}})
    assert m == Crypto(crypto=CryptoKind.BTC, address="D123", memo=None)


def test_decode_rejects_other_shapes() -> None:
    assert decode({"kind": "cash", "payload": {}}) is None
    assert decode({"kind": "paypal"}) is None
    assert decode("paypal") is None
    assert decode({"iban": "DE89"}) is None


def test_lines_skip_blank_fields() -> None:
    assert BankIBAN(iban="DE89", swift="COBADEFF").lines() == [
        "Bank Transfer (IBAN/SWIFT)", "IBAN: DE89", "SWIFT: COBADEFF",
    ]
    assert Crypto(crypto=CryptoKind.USDT, address="T9").lines() == ["Crypto (USDT)", "Address: T9"]
    assert Other(name="", details="Cash on delivery").lines() == ["Other", "Cash on delivery"]


def test_titles_and_validity() -> None:
    assert PayPal(email="p@q.example").title == "PayPal"
    assert BankUS(account="1", routing="2").subtitle == "Acct: 1 · Routing: 2"
    assert not BankIBAN(iban="DE89", swift=" ").is_valid
    assert CardLink(url="https://pay.example").is_valid
    assert is_payment_method(PayPal(email="x"))
    assert not is_payment_method({"kind": "paypal"})
