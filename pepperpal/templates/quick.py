"""Slash-command answers that never reach the pipeline."""

from __future__ import annotations

from pepperpal.constants import VERIFIED_FACTS as F
from pepperpal.templates.factual import FACTUAL_TEMPLATES

_GOVERNANCE_URL = f"{F['WEBSITE']}/pepper-inc"

_STAKE = (
    "Staking PEPPER:\n\n"
    "Stake your PEPPER to earn rewards and vote in Pepper Inc governance.\n"
    "About half of the circulating supply is staked.\n\n"
    f"Learn more: {_GOVERNANCE_URL}"
)
_GOVERNANCE = (
    "Pepper Inc - Community Governance:\n\n"
    "Stake PEPPER to vote on proposals and shape the future of Peppercoin.\n\n"
    f"🗳️ {_GOVERNANCE_URL}"
)
_EXPLORER = (
    f"{F['CHAIN_NAME']} Explorer:\n{F['EXPLORER']}\n\n"
    "View PEPPER transactions and holder data."
)
_CHAIN = (
    f"{F['CHAIN_NAME']} details:\n\n"
    f"- Chain ID: {F['CHAIN_ID']}\n"
    f"- Explorer: {F['EXPLORER']}\n"
    "- Type: EVM-compatible\n\n"
    f"PEPPER lives on {F['CHAIN_NAME']}."
)
_TOKENOMICS = (
    "PEPPER Tokenomics:\n\n"
    f"📊 Total supply: {F['TOTAL_SUPPLY']}\n"
    f"🔥 Burned: over {F['BURNED']}\n"
    f"⚡ Network: {F['CHAIN_NAME']} ({F['CHAIN_ID']})\n"
    f"🔒 Security: {F['AUDITOR']} audited\n\n"
    "About half of the circulating supply is staked in Pepper Inc governance."
)
_CEX = (
    "🏛 Centralized exchange listings:\n\n"
    "- MEXC\n- CoinEx\n- Bitrue\n- Cube\n- Paribu\n\n"
    f"Always verify the contract: {F['CONTRACT']}"
)
_DEX = (
    "🔄 Decentralized exchange listings (PEPPER/WCHZ):\n\n"
    f"- FanX Protocol: {F['DEX']}\n"
    "- Kewl\n- Diviswap\n\n"
    f"Contract: {F['CONTRACT']}"
)

# Command name (without the slash) -> reply text.
QUICK_COMMANDS: dict[str, str] = {
    "website": FACTUAL_TEMPLATES["website"],
    "contract": FACTUAL_TEMPLATES["contract"],
    "buy": FACTUAL_TEMPLATES["where to buy"],
    "stake": _STAKE,
    "governance": _GOVERNANCE,
    "twitter": FACTUAL_TEMPLATES["twitter"],
    "x": FACTUAL_TEMPLATES["twitter"],
    "telegram": FACTUAL_TEMPLATES["telegram"],
    "coingecko": f"PEPPER on CoinGecko: {F['COINGECKO']}",
    "explorer": _EXPLORER,
    "chain": _CHAIN,
    "links": FACTUAL_TEMPLATES["links"],
    "tokenomics": _TOKENOMICS,
    "cex": _CEX,
    "dex": _DEX,
}

QUICK_DESCRIPTIONS: dict[str, str] = {
    "website": "Official website",
    "contract": "Contract address",
    "buy": "Where to buy PEPPER",
    "stake": "Staking info",
    "governance": "Pepper Inc governance",
    "twitter": "Official X / Twitter",
    "x": "Official X / Twitter",
    "telegram": "Official Telegram",
    "coingecko": "CoinGecko listing",
    "explorer": "Chain explorer",
    "chain": "Chiliz Chain details",
    "links": "All official links",
    "tokenomics": "Supply and tokenomics",
    "cex": "Centralized exchanges",
    "dex": "Decentralized exchanges",
}


def quick_reply(command: str) -> str | None:
    """Reply for ``/command`` (leading slash and ``@botname`` suffix ignored)."""
    name = command.lstrip("/").split("@", 1)[0].lower()
    return QUICK_COMMANDS.get(name)
