from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union
import json
import logging

from invoicer.core.paths import default_output_dir, settings_path

logger = logging.getLogger(__name__)


@dataclass
class Settings:
	# Template design key, see invoicer.styles.templates.TEMPLATE_STYLES
	template_design: str = "modern_clean"
	# Palette name, see invoicer.styles.themes.THEMES
	theme_name: str = "Ocean Blue"
	# Fallback currency when an invoice carries none
	currency: str = "USD"
	# Optional absolute/relative path to a logo image
	logo_path: Optional[str] = None
	# Allocate continuation pages when the item table overflows page 1.
	# False keeps the single-page behaviour (rows past page 1 are dropped).
	multi_page: bool = True
	# Optional directory for generated PDFs; None means <user dir>/invoices
	output_dir: Optional[str] = None
	# Template supports {number}, {date}, {customer}
	file_name_template: str = "Invoice-{number}"

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "Settings":
		# Merge provided values over defaults, ignore unknown keys
		defaults = asdict(cls())
		merged: Dict[str, Any] = {**defaults, **{k: v for k, v in data.items() if k in defaults}}
		return cls(**merged)

	def to_dict(self) -> Dict[str, Any]:
		return asdict(self)

	def file_name(self, number: str, date_str: str = "", customer: str = "") -> str:
		"""Render file_name_template into a safe '<name>.pdf' file name."""
		try:
			stem = self.file_name_template.format(number=number, date=date_str, customer=customer)
		except (KeyError, IndexError, ValueError):
			stem = f"Invoice-{number}"
		safe = "".join(ch if ch.isalnum() or ch in " -_." else "_" for ch in stem).strip()
		return f"{safe or 'Invoice'}.pdf"

	def output_path(self, number: str, date_str: str = "", customer: str = "") -> Path:
		"""Full target path for an invoice PDF; the directory is not created here."""
		base = Path(self.output_dir).expanduser() if self.output_dir else default_output_dir()
		return base / self.file_name(number, date_str, customer)


def _coerce_path(path: Optional[Union[str, Path]]) -> Path:
	return Path(path) if path is not None else settings_path()


def _read_json(p: Path) -> Optional[Any]:
	try:
		return json.loads(p.read_text(encoding="utf-8"))
	except (json.JSONDecodeError, UnicodeDecodeError, OSError):
		return None


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
	"""
	Load settings from JSON (UTF-8). If the file is missing, write defaults and return them.
	"""
	p = _coerce_path(path)
	if not p.exists():
		settings = Settings()
		save_settings(settings, p)
		return settings

	raw = _read_json(p)
	if raw is None:
		# Corrupt file is left in place for the user to fix
		logger.warning("Could not read settings from %s, using defaults", p)
		return Settings()
	if not isinstance(raw, dict):
		logger.warning("Settings file %s does not hold an object, using defaults", p)
		raw = {}
	return Settings.from_dict(raw)


def save_settings(settings: Settings, path: Optional[Union[str, Path]] = None) -> None:
	"""Save settings to JSON (UTF-8), creating parent dirs if needed."""
	p = _coerce_path(path)
	p.parent.mkdir(parents=True, exist_ok=True)
	tmp = p.with_suffix(p.suffix + ".tmp")
	with tmp.open("w", encoding="utf-8", newline="\n") as f:
		json.dump(settings.to_dict(), f, indent=2, ensure_ascii=False)
		f.write("\n")
	tmp.replace(p)
