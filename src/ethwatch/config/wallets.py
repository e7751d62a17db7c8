"""Wallets file loader.

The wallets file lists one ``name:address`` pair per line. Blank lines
and lines starting with ``#`` are ignored:

    # treasury wallets
    treasury:0x742d35Cc6634C0532925a3b844Bc454e4438f44e
    hot-wallet:0x8ba1f109551bD432803012645Ac136ddd64DBA72
"""

from pathlib import Path

import structlog

from ethwatch.core.exceptions import ConfigurationError
from ethwatch.core.models import Wallet, is_valid_ethereum_address

log = structlog.get_logger(__name__)


def parse_wallets(lines: list[str]) -> list[Wallet]:
    """Parse wallet definitions.

    Args:
        lines: Raw lines of the wallets file.

    Returns:
        Wallets in file order.

    Raises:
        ConfigurationError: On a malformed line or when no wallet is defined.
    """
    wallets: list[Wallet] = []

    for line_num, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        name, sep, address = line.partition(":")
        if not sep:
            raise ConfigurationError(
                f"invalid format on line {line_num}: expected 'name:address', got '{line}'"
            )

        name = name.strip()
        address = address.strip()

        if not name:
            raise ConfigurationError(f"empty wallet name on line {line_num}")

        if not is_valid_ethereum_address(address):
            raise ConfigurationError(
                f"invalid Ethereum address '{address}' on line {line_num}"
            )

        wallets.append(Wallet(name=name, address=address))

    if not wallets:
        raise ConfigurationError("no wallets found in file")

    return wallets


def load_wallets(path: str | Path) -> list[Wallet]:
    """Load wallets from a file.

    Raises:
        ConfigurationError: If the file cannot be read or is invalid.
    """
    file_path = Path(path)
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"failed to open wallets file: {e}") from e

    wallets = parse_wallets(content.splitlines())
    log.info("wallets_loaded", path=str(file_path), wallets_count=len(wallets))
    return wallets
