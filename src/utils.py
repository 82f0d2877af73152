"""
Utility helpers shared by the API and the dashboard page.
"""

import re

# Legacy (P2PKH) and P2SH addresses: base58 alphabet, no 0/O/I/l.
_BASE58_ADDRESS = re.compile(r"[13][1-9A-HJ-NP-Za-km-z]{25,34}")

# Native segwit / taproot: bech32 data charset, single case only.
_BECH32_ADDRESS = re.compile(r"bc1[02-9ac-hj-np-z]{8,87}")


def is_valid_bitcoin_address(address) -> bool:
    """Return True if address has the shape of a mainnet Bitcoin address.

    Checks prefix, alphabet and length only; checksums are not verified.
    Anything passing this check is also safe to use as a file name.
    """
    if not isinstance(address, str) or not address:
        return False
    if _BASE58_ADDRESS.fullmatch(address):
        return True
    # bech32 is case-insensitive but must not mix cases
    if address != address.lower() and address != address.upper():
        return False
    return bool(_BECH32_ADDRESS.fullmatch(address.lower()))
