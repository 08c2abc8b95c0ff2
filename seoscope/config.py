import os
import logging
from pathlib import Path
from typing import Optional

try:
	from dotenv import load_dotenv
except ImportError:
	logging.warning("python-dotenv not available; using environment variables only")
else:
	loaded = load_dotenv()
	if not loaded and Path(".env").exists():
		raise RuntimeError(".env file present but failed to load")

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def get_str_env(name: str, default: str) -> str:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	return raw


def get_optional_str_env(name: str) -> Optional[str]:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return None
	return raw


def get_int_env(name: str, default: int) -> int:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return int(raw)
	except Exception:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_float_env(name: str, default: float) -> float:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return float(raw)
	except Exception:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_bool_env(name: str, default: bool) -> bool:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	value = raw.strip().lower()
	if value in _TRUE_VALUES:
		return True
	if value in _FALSE_VALUES:
		return False
	logging.error("Invalid %s: %r", name, raw)
	return default


USER_AGENT = get_str_env("USER_AGENT", "SEOScope/1.0 (+https://seoscope.dev/bot)")
ACCEPT_LANGUAGE = get_str_env("ACCEPT_LANGUAGE", "de-DE,de;q=0.9,en;q=0.8")
CRAWL_DELAY = get_float_env("CRAWL_DELAY", 1.0)
MAX_PAGES = get_int_env("MAX_PAGES", 10)


def mobile_check_mode() -> str:
	return (get_str_env("SEOSCOPE_MOBILE_CHECK", "header") or "header").strip().lower()


def respect_robots_txt() -> bool:
	# Carried for configuration parity; robots.txt is not enforced.
	return get_bool_env("SEOSCOPE_RESPECT_ROBOTS_TXT", True)
