import re
from typing import Any

from domain.exceptions.currency import InvalidCurrencyError

_CODE_PATTERN = re.compile(r'[A-Z]{3}')


def normalize_code(code: Any) -> str:
	"""Trim and uppercase a currency code, rejecting anything that is not three letters."""
	if not code or not isinstance(code, str):
		raise InvalidCurrencyError(f'Invalid currency code: {code!r}')

	normalized = code.strip().upper()
	if not _CODE_PATTERN.fullmatch(normalized):
		raise InvalidCurrencyError(f'Invalid currency code: {code}')
	return normalized


def parse_symbols(raw: str | None) -> list[str]:
	"""Parse a comma separated symbol list. An empty result means no filter."""
	if not raw:
		return []

	symbols: list[str] = []
	for part in raw.split(','):
		if not part.strip():
			continue
		code = normalize_code(part)
		if code not in symbols:
			symbols.append(code)
	return symbols
