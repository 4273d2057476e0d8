from __future__ import annotations

from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import json
import logging

from invoice_studio.core.paths import settings_path

logger = logging.getLogger(__name__)

# Path to the settings.json (runtime-aware)
SETTINGS_PATH = settings_path()

LOGO_URL = "https://raw.githubusercontent.com/Terback/Images/main/logo/icon_darkblue.png"


@dataclass
class Settings:
	# Company identity printed in the header block
	company_name: str = "EVO-IN-MOTION Technology Ltd."
	company_address: str = "180-6660 Graybar Rd."
	company_city: str = "Richmond, BC V6W 1H9"
	company_email: str = "info@eimtechnology.com"
	business_number: str = "769120726"
	# Tax rows; labels are editable per document, rates are percentages
	gst_label: str = "769120726-RT0001 GST"
	gst_rate: float = 5.0
	pst_label: str = "PST-1113-5003 PST"
	pst_rate: float = 7.0
	# Payment instructions footer
	etransfer_email: str = "evoinmotion@gmail.com"
	pos_note: str = "Support POS payment for Credit Card, Alipay and Wechat, payable to EIM Technology"
	thank_you: str = "THANK YOU FOR YOUR BUSINESS!"
	# Copyright stamp drawn on every page
	copyright_line: str = "Copyright © 2025 by EVO-IN-MOTION TECHNOLOGY LTD. All rights reserved."
	site_line: str = "www.eimtechnology.com"
	logo_url: Optional[str] = LOGO_URL
	currency: str = "US$"
	currencies: List[str] = field(default_factory=lambda: ["US$", "CA$", "$"])
	# Days between issue date and due date for new documents
	due_days: int = 30
	# Optional directory for generated PDFs; None means the current directory
	output_dir: Optional[str] = None

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "Settings":
		# Merge provided values over defaults, ignore unknown keys
		defaults = asdict(cls())
		merged: Dict[str, Any] = {**defaults, **{k: v for k, v in data.items() if k in defaults}}
		return cls(**merged)

	def to_dict(self) -> Dict[str, Any]:
		return asdict(self)


def _coerce_path(path: Optional[Union[str, Path]]) -> Path:
	return Path(path) if path is not None else SETTINGS_PATH


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
	"""
	Load settings from JSON (UTF-8). If the file is missing, write defaults and return them.
	"""
	p = _coerce_path(path)
	if not p.exists():
		settings = Settings()
		save_settings(settings, p)
		return settings

	try:
		with p.open("r", encoding="utf-8") as f:
			raw: Dict[str, Any] = json.load(f)
	except (json.JSONDecodeError, OSError):
		# Unreadable/corrupt: use defaults, leave the file alone
		logger.warning("Could not read settings from %s; using defaults", p)
		return Settings()

	return Settings.from_dict(raw if isinstance(raw, dict) else {})


def save_settings(settings: Settings, path: Optional[Union[str, Path]] = None) -> None:
	"""Save settings to JSON (UTF-8), creating parent dirs if needed."""
	p = _coerce_path(path)
	p.parent.mkdir(parents=True, exist_ok=True)
	tmp = p.with_suffix(p.suffix + ".tmp")
	with tmp.open("w", encoding="utf-8", newline="\n") as f:
		json.dump(settings.to_dict(), f, indent=2, ensure_ascii=False)
		f.write("\n")
	tmp.replace(p)
