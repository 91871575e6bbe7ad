"""Core constants shared across HexLab modules."""

from __future__ import annotations

from datetime import date

SUBGRAPH_URL = "https://graph.pulsechain.com/subgraphs/name/Codeakk/Hex"

# HEX day 0 starts at 2019-12-03 00:00 UTC.
HEX_LAUNCH_TIMESTAMP = 1575331200
HEX_LAUNCH_DATE = date(2019, 12, 3)
SECONDS_PER_DAY = 86400

# ETH amounts in the lobby are wei (18 decimals); HEX amounts are hearts (8).
WEI_PER_ETH = 10**18
HEARTS_PER_HEX = 10**8
SHARES_PER_TSHARE = 10**12

# The address whose outgoing, incoming and internal transfers are audited.
FLUSH_ADDRESS = "0xDEC9f2793e3c17cd26eeFb21C4762fA5128E0399".lower()

ALL_TRANSACTIONS_CSV = "all-trans.csv"
INTERNAL_TRANSACTIONS_CSV = "internal-trans.csv"

MIN_PAGE_SIZE = 10
MAX_PAGE_SIZE = 1000

# Client-side stake sort fields mapped to the subgraph field used for the
# server-side order of the fetched page.
STAKE_ORDER_MAPPING = {
    "start": "timestamp",
    "exp_end": "endDay",
    "days": "stakedDays",
    "hex_staked": "stakedHearts",
    "t_shares": "stakeTShares",
    "stake_ended": "stakeEnd__timestamp",
    "yield": "stakeEnd__payout",
    "minted": "stakedHearts",
    "roi": "stakeEnd__payout",
    "days_served": "stakeEnd__servedDays",
    "early_late": "stakeEnd__daysLate",
    "penalty": "stakeEnd__penalty",
}

STAKE_SORT_FIELDS: tuple[str, ...] = tuple(STAKE_ORDER_MAPPING)

EXPLORER_LINKS = {
    "etherscan": "https://etherscan.io/address/{address}",
    "pulsescan": "https://scan.pulsechain.com/address/{address}",
    "hexscout": "https://hexscout.com/{address}",
    "arkham": "https://intel.arkm.com/explorer/address/{address}",
    "debank": "https://debank.com/profile/{address}",
}

TRANSACTION_LINKS = {
    "etherscan": "https://etherscan.io/tx/{tx_hash}",
    "pulsescan": "https://scan.pulsechain.com/tx/{tx_hash}",
}

__all__ = [
    "SUBGRAPH_URL",
    "HEX_LAUNCH_TIMESTAMP",
    "HEX_LAUNCH_DATE",
    "SECONDS_PER_DAY",
    "WEI_PER_ETH",
    "HEARTS_PER_HEX",
    "SHARES_PER_TSHARE",
    "FLUSH_ADDRESS",
    "ALL_TRANSACTIONS_CSV",
    "INTERNAL_TRANSACTIONS_CSV",
    "MIN_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "STAKE_ORDER_MAPPING",
    "STAKE_SORT_FIELDS",
    "EXPLORER_LINKS",
    "TRANSACTION_LINKS",
]
