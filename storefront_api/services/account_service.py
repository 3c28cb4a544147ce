# ==============================================================================
# ACCOUNT SERVICE - Account Persistence
# ==============================================================================
# Thin layer over the store for the "accounts" collection
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, Optional

from storefront_api.core.constants import DatabaseConstants
from storefront_api.database.base_store import BaseStore, Record
from storefront_api.database.query import QueryTranslator
from storefront_api.schemas.account import AccountInDB


class AccountService:
    """
    Account lookups and creation.

    Returns :class:`AccountInDB`, which still carries the password hash.
    Callers that hand accounts to the outside must convert with
    ``to_response()``.
    """

    def __init__(self, store: BaseStore, translator: QueryTranslator) -> None:
        self._store = store
        self._translator = translator
        self._collection_name = DatabaseConstants.ACCOUNTS_COLLECTION

    def _to_model(self, record: Record) -> AccountInDB:
        return AccountInDB.model_validate(record)

    async def create(self, data: Dict[str, Any]) -> AccountInDB:
        """
        Persist a new account.

        Raises:
            ConflictError: If the email is already taken
        """
        record = await self._store.create(self._collection_name, data)
        return self._to_model(record)

    async def find_one_where(self, where: Dict[str, Any]) -> Optional[AccountInDB]:
        """First account matching ``where``, or None."""
        record = await self._store.find_first(
            self._collection_name,
            self._translator.where(where),
        )
        return self._to_model(record) if record else None

    async def find_by_id(self, account_id: int) -> Optional[AccountInDB]:
        record = await self._store.get_by_id(self._collection_name, account_id)
        return self._to_model(record) if record else None
