from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union


class CryptoKind(str, Enum):
	BTC = "BTC"
	ETH = "ETH"
	USDT = "USDT"
	USDC = "USDC"
	BNB = "BNB"

	@property
	def label(self) -> str:
		return self.value


def _clean(value: Optional[str]) -> Optional[str]:
	"""Trimmed string, or None when blank."""
	if value is None:
		return None
	s = str(value).strip()
	return s or None


def _join(parts: List[Optional[str]], sep: str = " · ") -> str:
	return sep.join(p for p in parts if p)


@dataclass(frozen=True)
class BankIBAN:
	iban: str
	swift: str
	beneficiary: Optional[str] = None

	kind = "bankIBAN"

	@property
	def title(self) -> str:
		return "Bank Transfer (IBAN/SWIFT)"

	@property
	def subtitle(self) -> str:
		iban, swift = _clean(self.iban), _clean(self.swift)
		return _join([
			_clean(self.beneficiary),
			f"IBAN: {iban}" if iban else None,
			f"SWIFT: {swift}" if swift else None,
		])

	@property
	def is_valid(self) -> bool:
		return bool(_clean(self.iban) and _clean(self.swift))

	def lines(self) -> List[str]:
		iban, swift, who = _clean(self.iban), _clean(self.swift), _clean(self.beneficiary)
		return [
			self.title,
			*([f"Beneficiary: {who}"] if who else []),
			*([f"IBAN: {iban}"] if iban else []),
			*([f"SWIFT: {swift}"] if swift else []),
		]

	def payload(self) -> Dict[str, str]:
		return {"iban": self.iban, "swift": self.swift, "beneficiary": self.beneficiary or ""}


@dataclass(frozen=True)
class BankUS:
	account: str
	routing: str
	bank_name: Optional[str] = None

	kind = "bankUS"

	@property
	def title(self) -> str:
		return "Bank Transfer (US ACH/Wire)"

	@property
	def subtitle(self) -> str:
		account, routing = _clean(self.account), _clean(self.routing)
		return _join([
			f"Acct: {account}" if account else None,
			f"Routing: {routing}" if routing else None,
			_clean(self.bank_name),
		])

	@property
	def is_valid(self) -> bool:
		return bool(_clean(self.account) and _clean(self.routing))

	def lines(self) -> List[str]:
		account, routing, bank = _clean(self.account), _clean(self.routing), _clean(self.bank_name)
		return [
			self.title,
			*([f"Bank: {bank}"] if bank else []),
			*([f"Account: {account}"] if account else []),
			*([f"Routing: {routing}"] if routing else []),
		]

	def payload(self) -> Dict[str, str]:
		return {"account": self.account, "routing": self.routing, "bankName": self.bank_name or ""}


@dataclass(frozen=True)
class PayPal:
	email: str

	kind = "paypal"
	title = "PayPal"

	@property
	def subtitle(self) -> str:
		return self.email

	@property
	def is_valid(self) -> bool:
		return bool(_clean(self.email))

	def lines(self) -> List[str]:
		email = _clean(self.email)
		return [self.title, *([email] if email else [])]

	def payload(self) -> Dict[str, str]:
		return {"email": self.email}


@dataclass(frozen=True)
class CardLink:
	"""Hosted checkout or pay-link URL (Stripe and similar)."""

	url: str

	kind = "cardLink"
	title = "Payment Link"

	@property
	def subtitle(self) -> str:
		return self.url

	@property
	def is_valid(self) -> bool:
		return bool(_clean(self.url))

	def lines(self) -> List[str]:
		url = _clean(self.url)
		return [self.title, *([url] if url else [])]

	def payload(self) -> Dict[str, str]:
		return {"url": self.url}


@dataclass(frozen=True)
class Crypto:
	crypto: CryptoKind
	address: str
	memo: Optional[str] = None

	kind = "crypto"

	@property
	def title(self) -> str:
		return f"Crypto ({self.crypto.label})"

	@property
	def subtitle(self) -> str:
		return _join([_clean(f"{self.crypto.label}: {self.address}"), _clean(self.memo)])

	@property
	def is_valid(self) -> bool:
		return bool(_clean(self.address))

	def lines(self) -> List[str]:
		address, memo = _clean(self.address), _clean(self.memo)
		return [
			self.title,
			*([f"Address: {address}"] if address else []),
			*([f"Memo: {memo}"] if memo else []),
		]

	def payload(self) -> Dict[str, str]:
		return {"kind": self.crypto.value, "address": self.address, "memo": self.memo or ""}


@dataclass(frozen=True)
class Other:
	name: str
	details: str

	kind = "other"

	@property
	def title(self) -> str:
		return _clean(self.name) or "Other"

	@property
	def subtitle(self) -> str:
		return self.details

	@property
	def is_valid(self) -> bool:
		return bool(_clean(self.name) and _clean(self.details))

	def lines(self) -> List[str]:
		details = _clean(self.details)
		return [self.title, *([details] if details else [])]

	def payload(self) -> Dict[str, str]:
		return {"name": self.name, "details": self.details}


PaymentMethod = Union[BankIBAN, BankUS, PayPal, CardLink, Crypto, Other]
PAYMENT_METHOD_TYPES = (BankIBAN, BankUS, PayPal, CardLink, Crypto, Other)


def is_payment_method(value: Any) -> bool:
	return isinstance(value, PAYMENT_METHOD_TYPES)


def encode(method: PaymentMethod) -> Dict[str, Any]:
	"""Serialize to the stored JSON shape {"kind": ..., "payload": {...}}."""
	return {"kind": method.kind, "payload": method.payload()}


def decode(data: Any) -> Optional[PaymentMethod]:
	"""Rebuild a payment method from its stored shape; None for anything else."""
	if not isinstance(data, Mapping):
		return None
	kind = data.get("kind")
	p = data.get("payload")
	if not isinstance(kind, str) or not isinstance(p, Mapping):
		return None

	def get(key: str) -> str:
		v = p.get(key)
		return "" if v is None else str(v)

	if kind == "bankIBAN":
		return BankIBAN(iban=get("iban"), swift=get("swift"), beneficiary=_clean(get("beneficiary")))
	if kind == "bankUS":
		return BankUS(account=get("account"), routing=get("routing"), bank_name=_clean(get("bankName")))
	if kind == "paypal":
		return PayPal(email=get("email"))
	if kind == "cardLink":
		return CardLink(url=get("url"))
	if kind == "crypto":
		try:
			crypto = CryptoKind(get("kind"))
		except ValueError:
			crypto = CryptoKind.BTC
		return Crypto(crypto=crypto, address=get("address"), memo=_clean(get("memo")))
	if kind == "other":
		return Other(name=get("name") or "Other", details=get("details"))
	return None
