"""Account method group: statistics, balance, profile, preferred translators."""

from __future__ import annotations

from gengo_client.api.models import (
    AccountBalance,
    AccountInfo,
    AccountStats,
    PreferredTranslatorGroup,
)
from gengo_client.groups.base import MethodGroup, pluck_list

_STATS = "account/stats"
_BALANCE = "account/balance"
_ME = "account/me"
_PREFERRED_TRANSLATORS = "account/preferred_translators"


class AccountMethodGroup(MethodGroup):
    """Read-only information about the authenticated account."""

    async def get_stats(self) -> AccountStats:
        """Credits spent, customer since, billing and customer type."""
        return await self._client.get_json(_STATS, parse=AccountStats.from_dict)

    async def get_balance(self) -> AccountBalance:
        """Remaining credits and their currency."""
        return await self._client.get_json(_BALANCE, parse=AccountBalance.from_dict)

    async def get_me(self) -> AccountInfo:
        return await self._client.get_json(_ME, parse=AccountInfo.from_dict)

    async def get_preferred_translators(self) -> list[PreferredTranslatorGroup]:
        """Preferred translators, grouped by language pair and tier."""
        return await self._client.get_json(
            _PREFERRED_TRANSLATORS,
            parse=pluck_list(None, PreferredTranslatorGroup.from_dict),
        )
